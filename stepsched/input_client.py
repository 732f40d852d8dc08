"""
input_client.py

Fetch precedence instructions over HTTP.

Puzzle inputs are usually served per user behind a session cookie, so a
token can be passed and is sent as the 'session' cookie.
"""

import logging

import requests

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30


class InputClient:
    """
    A small wrapper around a requests.Session for downloading instruction text.
    """

    def __init__(self, session_token=None, timeout=DEFAULT_TIMEOUT):
        self.session = requests.Session()
        self.session.headers.update({"User-Agent": "stepsched"})
        if session_token:
            self.session.cookies.set("session", session_token)
        self.timeout = timeout

    def get_text(self, url):
        """
        GET `url` and return the body as text.
        Non-2xx responses raise requests.HTTPError.
        """
        resp = self.session.get(url, timeout=self.timeout)
        resp.raise_for_status()
        logger.debug(f"Fetched {len(resp.text)} characters from {url}")
        return resp.text


def fetch_instructions(url, session_token=None, timeout=DEFAULT_TIMEOUT):
    return InputClient(session_token, timeout).get_text(url)


def save_instructions(text, file_path):
    """Write fetched text to `file_path`, ending with a single newline."""
    with open(file_path, "w") as f:
        f.write(text.rstrip("\n") + "\n")
