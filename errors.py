# SPDX-FileCopyrightText: 2024 Ondsel <development@ondsel.com>
#
# SPDX-License-Identifier: LGPL-2.0-or-later


class APIClientException(Exception):
    pass


class TransportError(APIClientException):
    """The request did not produce a usable response (connection or status)"""

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.status_code = status_code


class DecodeError(APIClientException):
    """The response body does not have the expected shape"""

    pass
