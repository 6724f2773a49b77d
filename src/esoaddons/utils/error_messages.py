"""User-friendly error message templates."""

import zipfile

from esoaddons.utils.symbols import LogSymbols


def get_user_friendly_error(error_type, error_details=""):
    """Convert error type to user-friendly message with actionable steps."""
    messages = {
        'network_timeout': (
            f"{LogSymbols.ERROR_BOLD} Connection problem\n"
            "The server did not answer in time or refused the connection.\n"
            "Try:\n"
            f"  {LogSymbols.BULLET} Check your internet connection\n"
            f"  {LogSymbols.BULLET} Try again later (server might be busy)"
        ),

        'network_404': (
            f"{LogSymbols.ERROR_BOLD} Add-on not found (404)\n"
            "The download link is broken or the add-on was removed.\n"
            "Try:\n"
            f"  {LogSymbols.BULLET} Open the landing page in a browser to check it still exists\n"
            f"  {LogSymbols.BULLET} Update the url in the add-on list"
        ),

        'invalid_url': (
            f"{LogSymbols.ERROR_BOLD} No usable download link\n"
            "The download url is empty or malformed.\n"
            "Try:\n"
            f"  {LogSymbols.BULLET} Check the url in the configuration or add-on list\n"
            f"  {LogSymbols.BULLET} The landing page layout may have changed"
        ),

        'disk_space': (
            f"{LogSymbols.ERROR_BOLD} Not enough disk space\n"
            "Your drive doesn't have enough free space for the add-ons.\n"
            "Try:\n"
            f"  {LogSymbols.BULLET} Free up some space and run again"
        ),

        'permission_denied': (
            f"{LogSymbols.ERROR_BOLD} Permission denied\n"
            "The installer can't write to the add-on folder.\n"
            "Try:\n"
            f"  {LogSymbols.BULLET} Check folder permissions of ADDON_DIR\n"
            f"  {LogSymbols.BULLET} Close the game if it's running"
        ),

        'corrupted_archive': (
            f"{LogSymbols.ERROR_BOLD} Corrupted download\n"
            "The downloaded file is not a valid zip archive.\n"
            "Try:\n"
            f"  {LogSymbols.BULLET} Run the installer again\n"
            f"  {LogSymbols.BULLET} Check that the url points at a zip file"
        ),
    }

    default_message = (
        f"{LogSymbols.ERROR_BOLD} An error occurred\n"
        f"Technical details: {error_details}"
    )

    return messages.get(error_type, default_message)


def suggest_fix_for_error(exception):
    """Map an exception to one of the message keys above, or None."""
    import requests

    # Network errors
    if isinstance(exception, (requests.exceptions.MissingSchema,
                              requests.exceptions.InvalidSchema,
                              requests.exceptions.InvalidURL)):
        return 'invalid_url'
    elif isinstance(exception, (requests.exceptions.Timeout,
                                requests.exceptions.ConnectionError)):
        return 'network_timeout'
    elif isinstance(exception, requests.exceptions.HTTPError):
        response = exception.response
        if response is not None and response.status_code == 404:
            return 'network_404'
    elif isinstance(exception, requests.exceptions.RequestException):
        # RequestException subclasses IOError, keep it out of the file system branch
        return None

    # File system errors
    elif isinstance(exception, PermissionError):
        return 'permission_denied'
    elif isinstance(exception, OSError):
        if 'No space left' in str(exception):
            return 'disk_space'
        return 'permission_denied'

    # Archive errors
    elif isinstance(exception, zipfile.BadZipFile):
        return 'corrupted_archive'

    return None  # Use default message


def log_error_hint(log_callback, error):
    """Log the actionable hint for an installer error, if there is one.

    Call after the ERROR line it belongs to.
    """
    error_type = suggest_fix_for_error(error.__cause__ or error)
    if error_type:
        log_callback(get_user_friendly_error(error_type), info=True)
