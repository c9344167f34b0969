# SPDX-FileCopyrightText: 2024 Ondsel <development@ondsel.com>
#
# SPDX-License-Identifier: LGPL-2.0-or-later

import unittest
from unittest.mock import patch

import requests

import Utils
from dashboard_fixtures import load_payload, make_response

from APIClient import APIClient
from errors import APIClientException, DecodeError, TransportError
from models.dashboard_response import DashboardResponse

API_URL = "https://api.example.test/api/v1"
TOKEN = "test-token"


class TestAPIClient(unittest.TestCase):
    def setUp(self):
        self.api_client = APIClient(API_URL, TOKEN, dump_responses=False)

    @patch("APIClient.requests.get")
    def test_get_dashboard(self, mock_get):
        mock_get.return_value = make_response(load_payload())

        response = self.api_client.getDashboard()

        self.assertIsInstance(response, DashboardResponse)
        self.assertEqual(response.total_clicks, 9612)
        mock_get.assert_called_once()
        args, kwargs = mock_get.call_args
        self.assertEqual(args[0], f"{API_URL}/dashboardNew")
        self.assertEqual(kwargs["headers"]["Authorization"], f"Bearer {TOKEN}")
        self.assertNotIn("params", kwargs)
        self.assertNotIn("timeout", kwargs)

    @patch("APIClient.requests.get")
    def test_missing_token_fails_before_the_request(self, mock_get):
        with patch.object(Utils.env, "api_token", None):
            api_client = APIClient(API_URL)

        with self.assertRaises(TransportError) as cm:
            api_client.getDashboard()
        self.assertIn("no API token configured", str(cm.exception))
        self.assertIsNone(cm.exception.status_code)
        mock_get.assert_not_called()

    @patch("APIClient.requests.get")
    def test_empty_token_fails_before_the_request(self, mock_get):
        with self.assertRaises(TransportError):
            APIClient(API_URL, "").getDashboard()
        mock_get.assert_not_called()

    @patch("APIClient.requests.get")
    def test_trailing_slash_in_base_url(self, mock_get):
        mock_get.return_value = make_response(load_payload())
        APIClient(API_URL + "/", TOKEN).getDashboard()
        self.assertEqual(mock_get.call_args[0][0], f"{API_URL}/dashboardNew")

    @patch("APIClient.requests.get")
    def test_connection_error_is_a_transport_error(self, mock_get):
        mock_get.side_effect = requests.exceptions.ConnectionError("no route")

        with self.assertRaises(TransportError) as cm:
            self.api_client.getDashboard()
        self.assertIsNone(cm.exception.status_code)
        self.assertIsInstance(cm.exception, APIClientException)

    @patch("APIClient.requests.get")
    def test_error_status_is_a_transport_error(self, mock_get):
        mock_get.return_value = make_response({"message": "jwt expired"}, 401)

        with self.assertRaises(TransportError) as cm:
            self.api_client.getDashboard()
        self.assertEqual(cm.exception.status_code, 401)

    @patch("APIClient.requests.get")
    def test_invalid_json_is_a_decode_error(self, mock_get):
        response = make_response(None)
        response.text = "<html>bad gateway</html>"
        response.json.side_effect = ValueError("Expecting value: line 1 column 1")
        mock_get.return_value = response

        with self.assertRaises(DecodeError):
            self.api_client.getDashboard()

    @patch("APIClient.requests.get")
    def test_wrong_shape_is_a_decode_error(self, mock_get):
        payload = load_payload()
        del payload["data"]
        mock_get.return_value = make_response(payload)

        with self.assertRaises(DecodeError):
            self.api_client.getDashboard()

    @patch("APIClient.requests.get")
    def test_raw_body_not_logged_by_default(self, mock_get):
        mock_get.return_value = make_response(load_payload())
        with self.assertNoLogs("APIClient", level="DEBUG"):
            self.api_client.getDashboard()

    @patch("APIClient.requests.get")
    def test_raw_body_logged_when_enabled(self, mock_get):
        mock_get.return_value = make_response(load_payload())
        api_client = APIClient(API_URL, TOKEN, dump_responses=True)

        with self.assertLogs("APIClient", level="DEBUG") as cm:
            api_client.getDashboard()
        self.assertTrue(
            any("Raw JSON response" in line for line in cm.output), cm.output
        )


if __name__ == "__main__":
    unittest.main()
