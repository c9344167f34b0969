# SPDX-FileCopyrightText: 2024 Ondsel <development@ondsel.com>
#
# SPDX-License-Identifier: LGPL-2.0-or-later

from dataclasses import dataclass, field

import Utils
from models.dashboard_data import DashboardData


@dataclass(frozen=True)
class DashboardResponse:
    """
    The envelope returned by the `dashboardNew` endpoint.

    The aggregate counters are account wide; the per-link data lives in
    `data`. A response without a decodable `data` is rejected as a whole.
    """

    status: bool
    status_code: int = field(metadata=Utils.json_key("statusCode"))
    message: str
    support_whatsapp_number: str
    extra_income: float
    total_links: int
    total_clicks: int
    today_clicks: int
    top_source: str
    top_location: str
    start_time: str = field(metadata=Utils.json_key("startTime"))
    links_created_today: int
    applied_campaign: int
    data: DashboardData

    @classmethod
    def from_json(cls, json_data):
        return Utils.import_json_strict(cls, json_data)

    def to_json(self):
        return Utils.export_json(self)
