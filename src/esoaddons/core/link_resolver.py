"""Resolve the direct archive url behind an add-on landing page."""
import requests

from .constants import LINK_LINE_MARKER, LINK_PREFIX, LINK_SUFFIX, REQUEST_TIMEOUT
from esoaddons.utils.symbols import LogSymbols


def extract_download_link(body: str) -> str:
    """Pull the archive url out of an esoui.com download page.

    The real anchor sits on the same line as the "Problems with the
    download?" text. Only that one pattern is recognised; anything else
    returns an empty string.
    """
    for line in body.splitlines():
        if LINK_LINE_MARKER not in line:
            continue
        _, found, tail = line.rpartition(LINK_PREFIX)
        if not found:
            return ''
        link, found, _ = tail.partition(LINK_SUFFIX)
        return link if found else ''
    return ''


class LinkResolver:
    """Turns a landing page url into a direct download url ('' if unresolvable)."""

    def resolve(self, landing_page_url: str) -> str:
        raise NotImplementedError


class EsouiLinkResolver(LinkResolver):

    def __init__(self, log_callback, timeout=REQUEST_TIMEOUT):
        self.log = log_callback
        self.timeout = timeout

    def fetch_page(self, landing_page_url: str) -> str:
        response = requests.get(landing_page_url, timeout=self.timeout)
        response.raise_for_status()
        return response.text

    def resolve(self, landing_page_url: str) -> str:
        try:
            body = self.fetch_page(landing_page_url)
        except requests.exceptions.RequestException as e:
            self.log(f"  {LogSymbols.WARNING} Could not load landing page '{landing_page_url}': {e}", warning=True)
            return ''

        link = extract_download_link(body)
        if not link:
            self.log(f"  {LogSymbols.WARNING} No download link found on '{landing_page_url}'", warning=True)
        return link
