# SPDX-FileCopyrightText: 2024 Ondsel <development@ondsel.com>
#
# SPDX-License-Identifier: LGPL-2.0-or-later

import uuid
from dataclasses import dataclass, field

from PySide6.QtCore import Qt, QAbstractListModel, QModelIndex, Slot


@dataclass(frozen=True, order=True)
class ChartPoint:
    label: str
    value: float
    id: uuid.UUID = field(
        default_factory=uuid.uuid4, init=False, compare=False, repr=False
    )


def chart_points_from_mapping(chart):
    """one bar per category; the mapping order is not meaningful"""
    return tuple(ChartPoint(label, float(count)) for label, count in chart.items())


class ChartPointListModel(QAbstractListModel):

    LabelRole = Qt.UserRole + 1
    ValueRole = Qt.UserRole + 2

    def __init__(self, *args, points=None, **kwargs):
        super(ChartPointListModel, self).__init__(*args, **kwargs)
        self.point_list = list(points or [])

    def data(self, index, role=Qt.DisplayRole):
        if not index.isValid() or index.row() >= len(self.point_list):
            return None
        point = self.point_list[index.row()]
        if role == Qt.DisplayRole or role == self.LabelRole:
            return point.label
        elif role == self.ValueRole:
            return point.value
        return None

    def rowCount(self, parent=QModelIndex()):
        return len(self.point_list)

    def roleNames(self):
        return {self.LabelRole: b"label", self.ValueRole: b"value"}

    @Slot(object)
    def updateData(self, points):
        self.beginResetModel()
        self.point_list = list(points)
        self.endResetModel()

    def maxValue(self):
        # views scale the bars to this
        return max((p.value for p in self.point_list), default=0.0)
