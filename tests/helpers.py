"""Shared fakes for the test suite."""

import io
import zipfile

import requests


def make_in_memory_zip(files):
    bio = io.BytesIO()
    with zipfile.ZipFile(bio, mode="w") as zf:
        for name, content in files.items():
            zf.writestr(name, content)
    bio.seek(0)
    return bio.getvalue()


def landing_page(direct_url):
    """Minimal esoui.com style download page."""
    return (
        "<html><body>\n"
        "<h1>Your download will begin shortly</h1>\n"
        f'<div class="manual">Problems with the download? <a href="{direct_url}">Click here</a>.</div>\n'
        "</body></html>\n"
    )


class FakeResp:
    def __init__(self, content=b"", status_code=200, text=None):
        self.content = content
        self.status_code = status_code
        self.text = text if text is not None else content.decode("utf-8", errors="replace")
        self.headers = {"Content-Type": "application/zip"}

    def iter_content(self, chunk_size=8192):
        for start in range(0, len(self.content), chunk_size):
            yield self.content[start:start + chunk_size]

    def raise_for_status(self):
        if self.status_code >= 400:
            error = requests.exceptions.HTTPError(f"{self.status_code} Client Error")
            error.response = self
            raise error


class FakeWeb:
    """Routes requests.get by url; unknown urls behave like a dead host."""

    def __init__(self, routes=None):
        self.routes = dict(routes or {})
        self.calls = []

    def get(self, url, **kwargs):
        self.calls.append(url)
        if not url:
            raise requests.exceptions.MissingSchema("Invalid URL '': No scheme supplied.")
        route = self.routes.get(url)
        if route is None:
            raise requests.exceptions.ConnectionError(f"Failed to resolve '{url}'")
        if isinstance(route, Exception):
            raise route
        return route


class Logger:
    def __init__(self):
        self.messages = []
        self.warning_messages = []

    def __call__(self, msg, error=False, info=False, warning=False, debug=False, success=False):
        self.messages.append((msg, error))
        if warning:
            self.warning_messages.append(msg)

    def errors(self):
        return [m for m, is_error in self.messages if is_error]
