# SPDX-FileCopyrightText: 2024 Ondsel <development@ondsel.com>
#
# SPDX-License-Identifier: LGPL-2.0-or-later

from enum import Enum, auto

from PySide6.QtCore import (
    Qt,
    QObject,
    Signal,
    Slot,
    QThreadPool,
    QRunnable,
    QCoreApplication,
)

import Utils
from APIClient import APIClient
from models.chart_point import ChartPointListModel
from models.link import LinkListModel

logger = Utils.getLogger(__name__)


class FetchState(Enum):
    IDLE = auto()
    REQUESTING = auto()
    DECODED = auto()
    FAILED = auto()


class _DashboardFetchSignals(QObject):
    fetched = Signal(object)  # DashboardResponse
    failed = Signal(object)  # the exception


class _DashboardFetchWorker(QRunnable):
    """
    Runs one `getDashboard()` call on a thread pool thread and emits the
    outcome. Nothing here touches published state; the receiving slots run
    on the thread that owns the DashboardService.
    """

    def __init__(self, api):
        super().__init__()
        self.api = api
        self.signals = _DashboardFetchSignals()

    def run(self):
        try:
            response = self.api.getDashboard()
        except Exception as e:
            # usually TransportError or DecodeError; report anything else the same way
            self.signals.failed.emit(e)
        else:
            self.signals.fetched.emit(response)


class DashboardService(QObject):
    """
    Owns the dashboard round trip and the state the views observe.

    `refresh()` is fire and forget: the result shows up as new values of
    `topLinks`, `recentLinks` and `chartPoints` plus the matching change
    signals. A failed fetch is logged and leaves those values as they were.
    Overlapping refreshes are not serialized; whichever finishes last wins.
    """

    topLinksChanged = Signal(object)
    recentLinksChanged = Signal(object)
    chartPointsChanged = Signal(object)
    dashboardChanged = Signal()
    stateChanged = Signal(object)

    def __init__(self, api=None, parent=None, autostart=True):
        super().__init__(parent)
        self.api = api if api is not None else APIClient()
        self.thread_pool = QThreadPool()

        self._top_links = ()
        self._recent_links = ()
        self._chart_points = ()
        self._state = FetchState.IDLE
        self._in_flight = 0
        # keeps the signal objects alive until their result is delivered
        self._pending = set()

        self.top_links_model = LinkListModel(parent=self)
        self.recent_links_model = LinkListModel(parent=self)
        self.chart_model = ChartPointListModel(parent=self)
        self.topLinksChanged.connect(self.top_links_model.updateData)
        self.recentLinksChanged.connect(self.recent_links_model.updateData)
        self.chartPointsChanged.connect(self.chart_model.updateData)

        app = QCoreApplication.instance()
        if app is not None:
            app.aboutToQuit.connect(self.shutdown)

        if autostart:
            self.refresh()

    @property
    def topLinks(self):
        return self._top_links

    @property
    def recentLinks(self):
        return self._recent_links

    @property
    def chartPoints(self):
        return self._chart_points

    @property
    def state(self):
        return self._state

    def _setState(self, state):
        self._state = state
        self.stateChanged.emit(state)

    def is_busy(self):
        return self._in_flight > 0

    def refresh(self):
        worker = _DashboardFetchWorker(self.api)
        signals = worker.signals
        self._pending.add(signals)
        signals.fetched.connect(self._onFetched, Qt.QueuedConnection)
        signals.failed.connect(self._onFailed, Qt.QueuedConnection)

        self._in_flight += 1
        self._setState(FetchState.REQUESTING)
        self.thread_pool.start(worker)

    def _finishFetch(self):
        self._pending.discard(self.sender())  # None when called directly
        self._in_flight = max(self._in_flight - 1, 0)
        if self._in_flight == 0:
            self._setState(FetchState.IDLE)
        else:
            self._setState(FetchState.REQUESTING)

    @Slot(object)
    def _onFetched(self, response):
        data = response.data
        # all three are replaced before anyone is told
        self._top_links = data.top_links
        self._recent_links = data.recent_links
        self._chart_points = data.chart_points()

        self._setState(FetchState.DECODED)
        self.topLinksChanged.emit(self._top_links)
        self.recentLinksChanged.emit(self._recent_links)
        self.chartPointsChanged.emit(self._chart_points)
        self.dashboardChanged.emit()
        self._finishFetch()

    @Slot(object)
    def _onFailed(self, error):
        self._setState(FetchState.FAILED)
        logger.error(f"Error fetching dashboard: {type(error).__name__}: {error}")
        self._finishFetch()

    @Slot()
    def shutdown(self):
        self.thread_pool.waitForDone()
