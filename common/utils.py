# Copyright 2025 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Helpers for moving media around as base64 data URIs."""

import base64
import binascii
import re

_DATA_URI_RE = re.compile(r"^data:(?P<mime>[\w.+-]+/[\w.+-]+);base64,(?P<data>.*)$", re.DOTALL)


def is_data_uri(value: str) -> bool:
    """Returns True if value is data:<mimetype>;base64,<data> with a valid payload."""
    if not isinstance(value, str):
        return False
    match = _DATA_URI_RE.match(value)
    if not match or not match.group("data"):
        return False
    try:
        base64.b64decode(match.group("data"), validate=True)
    except binascii.Error:
        return False
    return True


def parse_data_uri(uri: str) -> tuple[str, str]:
    """Splits a data URI into its mime type and base64 payload.

    Args:
        uri: A string of the form data:<mimetype>;base64,<data>.

    Returns:
        A (mime_type, base64_data) tuple.

    Raises:
        ValueError: If the string is not a base64 data URI.
    """
    match = _DATA_URI_RE.match(uri or "")
    if not match or not match.group("data"):
        raise ValueError("Expected a data URI of the form data:<mimetype>;base64,<data>.")
    return match.group("mime"), match.group("data")


def data_uri_to_bytes(uri: str) -> tuple[str, bytes]:
    """Decodes a data URI into (mime_type, raw bytes)."""
    mime_type, data = parse_data_uri(uri)
    try:
        return mime_type, base64.b64decode(data, validate=True)
    except binascii.Error as e:
        raise ValueError(f"Data URI payload is not valid base64: {e}") from e


def bytes_to_data_uri(data: bytes, mime_type: str) -> str:
    """Encodes raw bytes as a data URI."""
    encoded = base64.b64encode(data).decode("utf-8")
    return f"data:{mime_type};base64,{encoded}"
