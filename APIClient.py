# SPDX-FileCopyrightText: 2024 Ondsel <development@ondsel.com>
#
# SPDX-License-Identifier: LGPL-2.0-or-later

import requests

import Utils
from errors import DecodeError, TransportError
from models.dashboard_response import DashboardResponse

logger = Utils.getLogger(__name__)

OK = requests.codes.ok

DASHBOARD_ENDPOINT = "dashboardNew"


class APIClient:
    def __init__(self, api_url=None, access_token=None, dump_responses=None):
        self.base_url = (api_url or Utils.env.api_url).rstrip("/")
        self.access_token = (
            access_token if access_token is not None else Utils.env.api_token
        )
        if dump_responses is None:
            dump_responses = Utils.env.log_raw_response
        self.dump_responses = dump_responses

    def _set_default_headers(self, headers):
        headers["Authorization"] = f"Bearer {self.access_token}"
        headers["Accept"] = "application/json"

        return headers

    def _raiseException(self, response, **kwargs):
        "Raise a transport error based on the status code"
        self._dump_response(response, **kwargs)
        raise TransportError(
            f"API request failed with status code {response.status_code}",
            status_code=response.status_code,
        )

    def _request(self, endpoint, headers=None):
        if not self.access_token:
            raise TransportError("no API token configured (set DASHBOARD_API_TOKEN)")
        headers = self._set_default_headers(dict(headers or {}))
        try:
            response = requests.get(f"{self.base_url}/{endpoint}", headers=headers)
        except requests.exceptions.RequestException as e:
            raise TransportError(str(e)) from e

        if response.status_code != OK:
            self._raiseException(response, endpoint=endpoint)

        self._dump_response(response, endpoint=endpoint)
        try:
            return response.json()
        except ValueError as e:
            # requests' JSONDecodeError derives from ValueError
            raise DecodeError(f"Response body is not valid JSON: {e}") from e

    def _dump_response(self, response, **kwargs):
        if not self.dump_responses:
            return
        logger.debug("XXXXXX Call Data XXXXXX")
        for key, value in kwargs.items():
            logger.debug(f"{key} {value}")
        logger.debug("XXXXXXXXXXXXXXXXXXXXXXX")

        logger.debug(f"Status code: {response.status_code}")
        logger.debug(f"Content-Type: {response.headers.get('Content-Type')}")
        logger.debug(f"Raw JSON response: {response.text}")

    def getDashboard(self):
        """Fetch and decode the dashboard.

        Raises TransportError when no usable response arrives and DecodeError
        when the body does not match DashboardResponse.
        """
        result = self._request(DASHBOARD_ENDPOINT)
        return DashboardResponse.from_json(result)
