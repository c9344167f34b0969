# SPDX-FileCopyrightText: 2024 Ondsel <development@ondsel.com>
#
# SPDX-License-Identifier: LGPL-2.0-or-later

import uuid
from dataclasses import dataclass, field
from typing import Optional

from PySide6.QtCore import Qt, QAbstractListModel, QModelIndex, Slot

import Utils


@dataclass(frozen=True, order=True)
class Link:
    """One shortened url as listed on the dashboard."""

    url_id: int
    web_link: str
    smart_link: str
    title: str
    total_clicks: int
    original_image: Optional[str]
    thumbnail: Optional[str]
    times_ago: str  # already human readable, e.g. "2 hours ago"
    created_at: str
    domain_id: str
    url_prefix: Optional[str]
    url_suffix: str
    app: str
    is_favourite: bool
    # list identity for views only; fresh on every decode, never sent by the server
    id: uuid.UUID = field(
        default_factory=uuid.uuid4, init=False, compare=False, repr=False
    )

    @classmethod
    def from_json(cls, json_data, path=None):
        return Utils.import_json_strict(cls, json_data, path)

    def to_json(self):
        return Utils.export_json(self)


class LinkListModel(QAbstractListModel):

    LinkRole = Qt.UserRole + 1
    IdRole = Qt.UserRole + 2
    WebLinkRole = Qt.UserRole + 3
    SmartLinkRole = Qt.UserRole + 4
    TotalClicksRole = Qt.UserRole + 5

    def __init__(self, *args, links=None, **kwargs):
        super(LinkListModel, self).__init__(*args, **kwargs)
        self.link_list = list(links or [])

    def data(self, index, role=Qt.DisplayRole):
        if not index.isValid() or index.row() >= len(self.link_list):
            return None
        link = self.link_list[index.row()]
        if role == Qt.DisplayRole:
            return link.title
        elif role == self.LinkRole:
            return link
        elif role == self.IdRole:
            return str(link.id)
        elif role == self.WebLinkRole:
            return link.web_link
        elif role == self.SmartLinkRole:
            return link.smart_link
        elif role == self.TotalClicksRole:
            return link.total_clicks
        return None

    def rowCount(self, parent=QModelIndex()):
        return len(self.link_list)

    def roleNames(self):
        return {
            Qt.DisplayRole: b"title",
            self.LinkRole: b"link",
            self.IdRole: b"linkId",
            self.WebLinkRole: b"webLink",
            self.SmartLinkRole: b"smartLink",
            self.TotalClicksRole: b"totalClicks",
        }

    @Slot(object)
    def updateData(self, links):
        self.beginResetModel()
        self.link_list = list(links)
        self.endResetModel()

