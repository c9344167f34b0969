# SPDX-FileCopyrightText: 2024 Ondsel <development@ondsel.com>
#
# SPDX-License-Identifier: LGPL-2.0-or-later

import types
from dataclasses import dataclass

import Utils
from models.chart_point import chart_points_from_mapping
from models.link import Link


@dataclass(frozen=True)
class DashboardData:
    recent_links: tuple[Link, ...]
    top_links: tuple[Link, ...]
    overall_url_chart: dict[str, int]  # category label -> clicks

    def __post_init__(self):
        # read-only view so the frozen record cannot be changed through the dict
        chart = types.MappingProxyType(dict(self.overall_url_chart))
        object.__setattr__(self, "overall_url_chart", chart)

    @classmethod
    def from_json(cls, json_data, path=None):
        return Utils.import_json_strict(cls, json_data, path)

    def chart_points(self):
        return chart_points_from_mapping(self.overall_url_chart)
