# Copyright 2026 The lenra-check Authors
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

# -----------------------------------------------------------------------------
# APP CLIENT - CALLS TO THE APP UNDER TEST
# -----------------------------------------------------------------------------
# Responsibility: Send a JSON request to the locally running app and return
# its JSON answer. The app (of-watchdog) listens on port 8080:
#   {}                                  -> the manifest
#   {"view": "main", "data": [], ...}   -> the computed view
#
# No retry. No timeout unless configured: a hung app blocks the call.
# -----------------------------------------------------------------------------

from typing import Any

import requests

DEFAULT_APP_URL = "http://localhost:8080"


class AppCallError(Exception):
    """Raised when the app cannot be reached or does not answer with JSON."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class AppClient:
    """
    Synchronous JSON client for the app under test.

    Args:
        url: The app endpoint.
        timeout: Seconds before giving up on a call. None waits forever.
    """

    def __init__(self, url: str = DEFAULT_APP_URL, timeout: float | None = None) -> None:
        self.url = url
        self.timeout = timeout

    def call(self, request: dict[str, Any]) -> Any:
        """
        POST `request` to the app and decode the JSON answer.

        Raises:
            AppCallError: On connection errors, non-2xx statuses or non-JSON bodies.
        """
        try:
            response = requests.post(self.url, json=request, timeout=self.timeout)
        except requests.RequestException as e:
            raise AppCallError(f"Could not call the app at {self.url}: {e}") from e

        if not response.ok:
            raise AppCallError(
                f"The app answered {response.status_code}: {response.text[:200]}",
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as e:
            raise AppCallError(f"The app answer is not JSON: {e}", status_code=response.status_code) from e

    def get_manifest(self) -> Any:
        """Fetch the manifest document."""
        return self.call({})

    def get_view(
        self,
        view: str,
        data: list[Any] | None = None,
        props: dict[str, Any] | None = None,
    ) -> Any:
        """Fetch the result of a view for the given data and props."""
        request: dict[str, Any] = {"view": view}
        if data is not None:
            request["data"] = data
        if props is not None:
            request["props"] = props
        return self.call(request)
