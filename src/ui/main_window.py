import logging
import time
from datetime import date
from pathlib import Path

from PySide6.QtCore import Qt, Signal, QTimer
from PySide6.QtWidgets import (
    QMainWindow,
    QWidget,
    QVBoxLayout,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QListWidget,
    QListWidgetItem,
    QLineEdit,
    QDialog,
    QComboBox,
    QTextEdit,
    QMessageBox,
    QFileDialog,
    QMenuBar,
    QMenu,
    QAbstractItemView,
    QSplitter,
    QFrame,
    QStatusBar,
    QStackedWidget,
    QToolButton,
)
from PySide6.QtGui import QFont, QAction, QColor, QBrush, QPixmap, QPainter, QIcon

from models.criteria import DateRange, SortDirection, SortKey
from models.task import CATEGORIES, PRIORITIES, STATUSES, Subtask, Task
from models.user import USER_STATUSES
from services import analytics
from services import export as export_service
from services.dates import format_date, parse_date_string
from services.errors import TaskboardError, ValidationError
from services.view_model import TaskListViewModel
from ui.analytics_view import AnalyticsView
from ui.dialogs import AddEditTaskDialog, ProfileDialog

logger = logging.getLogger(__name__)

PRIORITY_COLORS = {
    "high": "#ef4444",  # red
    "medium": "#facc15",  # amber
    "low": "#22c55e",  # green
}
STATUS_DOTS = {"online": "#22c55e", "break": "#facc15", "shadow": "#8b5cf6", "offline": "#9ca3af"}

DATE_RANGE_OPTIONS = [
    ("All Dates", DateRange.ALL),
    ("Today", DateRange.TODAY),
    ("This Week", DateRange.WEEK),
    ("This Month", DateRange.MONTH),
]
SORT_OPTIONS = [
    ("Due Date", SortKey.DUE_DATE),
    ("Priority", SortKey.PRIORITY),
    ("Title", SortKey.TITLE),
    ("Created Date", SortKey.CREATED),
]

# Global stylesheet for a light, modern look with rounded corners and subtle spacing
APP_STYLE = """
QFrame#details,
QFrame#card,
QListWidget {
background: #ffffff;
border-radius: 12px;
border: 1px solid rgba(15, 23, 34, 0.06);
}


QListWidget {
padding: 8px;
}


QListWidget::item {
padding: 8px;
margin: 4px 0;
border-radius: 8px;
}


/* Ensure selected item background is readable and keeps dark text */
QListWidget::item:selected {
background: #e6f0ff; /* light blue */
color: #0f1722; /* dark text */
}


QLabel.titleLabel {
font-family: 'Segoe UI Semibold', 'Segoe UI', Roboto, Arial;
font-size: 13pt;
color: #5D5CDE;
}


QLabel.statValue {
font-size: 18pt;
font-weight: bold;
}


QPushButton,
QToolButton {
border: 1px solid #e6eef8;
padding: 6px 10px;
border-radius: 10px;
background: #ffffff;
}


QPushButton#addBtn {
background: qlineargradient(spread:pad, x1:0, y1:0, x2:1, y2:0, stop:0 #5D5CDE, stop:1 #7c7bf0);
color: white;
border: none;
}


QFrame#selectionBar {
background: #eef2ff;
border-radius: 10px;
}


QLineEdit,
QComboBox,
QDateEdit,
QTextEdit {
background: #fbfdff;
border: 1px solid #e6eef8;
border-radius: 8px;
padding: 6px;
}


QStatusBar {
background: transparent;
}
"""


def _dot_icon(color_hex: str, size: int = 14) -> QIcon:
    # small filled circle used for priority and presence markers
    pix = QPixmap(size, size)
    pix.fill(Qt.transparent)
    p = QPainter(pix)
    p.setRenderHint(QPainter.Antialiasing)
    p.setBrush(QColor(color_hex))
    p.setPen(Qt.NoPen)
    p.drawEllipse(0, 0, size - 1, size - 1)
    p.end()
    return QIcon(pix)


class TaskListWidget(QListWidget):
    """Task list with a right-click menu for the per-task actions."""

    item_action_requested = Signal(str, str)  # action, task id

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setSelectionMode(QAbstractItemView.SingleSelection)

    def contextMenuEvent(self, event):
        item = self.itemAt(event.pos())
        menu = QMenu(self)
        if item:
            task_id = item.data(Qt.UserRole)
            actions = {
                menu.addAction("Edit"): "edit",
                menu.addAction("Mark complete"): "complete",
                menu.addAction("Delete"): "delete",
                menu.addAction("Show details"): "details",
            }
            chosen = menu.exec(event.globalPos())
            if chosen in actions:
                self.item_action_requested.emit(actions[chosen], task_id)
        else:
            add_act = menu.addAction("Add task")
            if menu.exec(event.globalPos()) == add_act:
                self.item_action_requested.emit("add", "")


class MainWindow(QMainWindow):
    logged_out = Signal()
    closed = Signal()  # window closed while still signed in

    def __init__(self, session):
        super().__init__()
        self.session = session
        self.settings = session.settings
        self.vm = TaskListViewModel(session, self)
        self.setWindowTitle(f"{self.settings.app_name} - To-Do APP")
        self.setFont(QFont("Segoe UI", 10))
        self.setStyleSheet(APP_STYLE)

        self.selected_task_id = None
        self._rendering = False  # Flag to ignore itemChanged while repopulating
        self._selection_mode = False
        self._session_started = time.monotonic()

        self._setup_menu()
        self._setup_ui()

        self.vm.view_changed.connect(self.render_tasks)
        self.vm.criteria_changed.connect(self.on_criteria_changed)
        self.vm.selection.selection_changed.connect(self.on_selection_changed)
        self.session.tasks.tasks_changed.connect(self.on_tasks_changed)
        self.session.notifications.notifications_changed.connect(self.refresh_notifications)
        self.session.auth.user_changed.connect(self.refresh_user)

        self.render_tasks(list(self.vm.visible_tasks))
        self.on_tasks_changed()
        self.refresh_notifications()
        self.refresh_user(self.session.user)
        self.on_selection_changed()

        # elapsed session time in the header
        self.clock_timer = QTimer(self)
        self.clock_timer.timeout.connect(self.update_clock)
        self.clock_timer.start(1000)
        self.update_clock()

    # ---- layout ----

    def _setup_menu(self):
        menubar = QMenuBar(self)
        file_menu = QMenu("&File", self)
        export_csv = QAction("Export view to CSV", self)
        export_csv.triggered.connect(self.on_export_csv)
        export_xlsx = QAction("Export view to Excel (.xlsx)", self)
        export_xlsx.triggered.connect(self.on_export_xlsx)
        import_csv = QAction("Import CSV", self)
        import_csv.triggered.connect(self.on_import_csv)
        file_menu.addAction(export_csv)
        file_menu.addAction(export_xlsx)
        file_menu.addAction(import_csv)
        menubar.addMenu(file_menu)

        view_menu = QMenu("&View", self)
        list_act = QAction("Task list", self)
        list_act.setShortcut("Ctrl+1")
        list_act.triggered.connect(lambda: self.stack.setCurrentIndex(0))
        graph_act = QAction("Analytics", self)
        graph_act.setShortcut("Ctrl+2")
        graph_act.triggered.connect(lambda: self.stack.setCurrentIndex(1))
        clear_act = QAction("Clear filters", self)
        clear_act.triggered.connect(self.clear_filters)
        view_menu.addAction(list_act)
        view_menu.addAction(graph_act)
        view_menu.addSeparator()
        view_menu.addAction(clear_act)
        menubar.addMenu(view_menu)

        account_menu = QMenu("&Account", self)
        profile_act = QAction("Profile...", self)
        profile_act.triggered.connect(self.on_profile)
        logout_act = QAction("Log out", self)
        logout_act.triggered.connect(self.on_logout)
        account_menu.addAction(profile_act)
        account_menu.addAction(logout_act)
        menubar.addMenu(account_menu)

        help_menu = QMenu("&Help", self)
        about_act = QAction("About", self)
        about_act.triggered.connect(self.on_about)
        help_menu.addAction(about_act)
        menubar.addMenu(help_menu)

        self.setMenuBar(menubar)

    def _setup_ui(self):
        central = QWidget()
        v = QVBoxLayout(central)

        # header: user, presence, notifications, session clock
        header = QHBoxLayout()
        self.user_label = QLabel("")
        self.user_label.setFont(QFont("Segoe UI Semibold", 11))
        self.presence_cb = QComboBox()
        for s in USER_STATUSES:
            self.presence_cb.addItem(_dot_icon(STATUS_DOTS[s], 10), s.capitalize(), s)
        self.presence_cb.currentIndexChanged.connect(self.on_presence_changed)
        self.clock_label = QLabel("00:00:00")
        self.clock_label.setToolTip("Time since sign-in")
        self.notifications_btn = QToolButton()
        self.notifications_btn.setPopupMode(QToolButton.InstantPopup)
        self.notifications_menu = QMenu(self)
        self.notifications_btn.setMenu(self.notifications_menu)
        header.addWidget(self.user_label)
        header.addWidget(self.presence_cb)
        header.addStretch()
        header.addWidget(self.clock_label)
        header.addWidget(self.notifications_btn)
        v.addLayout(header)

        # stats cards
        stats = QHBoxLayout()
        self.stat_labels = {}
        for key, title, color in (
            ("total", "Total Tasks", "#3b82f6"),
            ("completed", "Completed Tasks", "#22c55e"),
            ("pending", "Pending Tasks", "#eab308"),
            ("overdue", "Overdue", "#ef4444"),
        ):
            card = QFrame()
            card.setObjectName("card")
            cl = QVBoxLayout(card)
            cl.addWidget(QLabel(title))
            value = QLabel("0")
            value.setProperty("class", "statValue")
            value.setStyleSheet(f"color: {color};")
            cl.addWidget(value)
            stats.addWidget(card)
            self.stat_labels[key] = value
        v.addLayout(stats)

        # toolbar
        toolbar = QHBoxLayout()
        add_btn = QPushButton("+ Add Task")
        add_btn.setObjectName("addBtn")
        add_btn.clicked.connect(self.on_add_task)
        add_btn.setShortcut("Ctrl+N")

        self.search = QLineEdit()
        self.search.setPlaceholderText("Search tasks...")
        self.search.textChanged.connect(self.vm.set_search)

        self.category_filter = QComboBox()
        self._fill_category_filter()
        self.category_filter.currentIndexChanged.connect(
            lambda _i: self.vm.set_category(self.category_filter.currentData())
        )
        self.priority_filter = QComboBox()
        self.priority_filter.addItem("All Priorities", "")
        for p in PRIORITIES:
            self.priority_filter.addItem(p, p)
        self.priority_filter.currentIndexChanged.connect(
            lambda _i: self.vm.set_priority(self.priority_filter.currentData())
        )
        self.status_filter = QComboBox()
        self.status_filter.addItem("All Status", "")
        for s in STATUSES:
            self.status_filter.addItem(s, s)
        self.status_filter.currentIndexChanged.connect(
            lambda _i: self.vm.set_status(self.status_filter.currentData())
        )
        self.date_filter = QComboBox()
        for label, value in DATE_RANGE_OPTIONS:
            self.date_filter.addItem(label, value.value)
        self.date_filter.currentIndexChanged.connect(
            lambda _i: self.vm.set_date_range(self.date_filter.currentData())
        )
        self.clear_filters_btn = QPushButton("Clear filters")
        self.clear_filters_btn.clicked.connect(self.clear_filters)
        self.clear_filters_btn.setEnabled(False)

        toolbar.addWidget(add_btn)
        toolbar.addWidget(self.search, 1)
        toolbar.addWidget(self.category_filter)
        toolbar.addWidget(self.priority_filter)
        toolbar.addWidget(self.status_filter)
        toolbar.addWidget(self.date_filter)
        toolbar.addWidget(self.clear_filters_btn)
        v.addLayout(toolbar)

        # sort + selection controls
        sort_row = QHBoxLayout()
        self.select_btn = QPushButton("Select")
        self.select_btn.clicked.connect(self.vm.selection.enter)
        self.count_label = QLabel("")
        self.sort_select = QComboBox()
        for label, key in SORT_OPTIONS:
            self.sort_select.addItem(label, key.value)
        self.sort_select.currentIndexChanged.connect(
            lambda _i: self.vm.set_sort_key(self.sort_select.currentData())
        )
        self.sort_direction_btn = QToolButton()
        self.sort_direction_btn.clicked.connect(self.on_toggle_sort_direction)
        self._update_sort_direction_button()
        sort_row.addWidget(self.select_btn)
        sort_row.addWidget(self.count_label)
        sort_row.addStretch()
        sort_row.addWidget(QLabel("Sort By:"))
        sort_row.addWidget(self.sort_select)
        sort_row.addWidget(self.sort_direction_btn)
        v.addLayout(sort_row)

        # batch action bar, visible only while something is selected
        self.selection_bar = QFrame()
        self.selection_bar.setObjectName("selectionBar")
        sb = QHBoxLayout(self.selection_bar)
        self.selected_count_label = QLabel("")
        complete_sel_btn = QPushButton("Mark Complete")
        complete_sel_btn.clicked.connect(self.on_complete_selected)
        delete_sel_btn = QPushButton("Delete")
        delete_sel_btn.clicked.connect(self.on_delete_selected_batch)
        cancel_sel_btn = QPushButton("Cancel")
        cancel_sel_btn.clicked.connect(self.vm.selection.cancel)
        sb.addWidget(self.selected_count_label)
        sb.addStretch()
        sb.addWidget(complete_sel_btn)
        sb.addWidget(delete_sel_btn)
        sb.addWidget(cancel_sel_btn)
        v.addWidget(self.selection_bar)

        # main area: list view / analytics view
        self.stack = QStackedWidget()
        splitter = QSplitter(Qt.Horizontal)

        self.task_list = TaskListWidget()
        self.task_list.item_action_requested.connect(self.on_item_action)
        self.task_list.itemDoubleClicked.connect(
            lambda item: self.on_item_action("edit", item.data(Qt.UserRole))
        )
        self.task_list.itemSelectionChanged.connect(self.on_list_selection_changed)
        self.task_list.itemChanged.connect(self.on_item_check_changed)
        self.empty_label = QLabel("No tasks found. Add a new task to get started.")
        self.empty_label.setAlignment(Qt.AlignCenter)
        list_box = QWidget()
        lb = QVBoxLayout(list_box)
        lb.setContentsMargins(0, 0, 0, 0)
        lb.addWidget(self.task_list)
        lb.addWidget(self.empty_label)
        splitter.addWidget(list_box)

        # right panel: details + actions
        details = QFrame()
        details.setObjectName("details")
        details.setFrameShape(QFrame.StyledPanel)
        details.setMinimumWidth(280)
        details_layout = QVBoxLayout(details)
        details_layout.setContentsMargins(8, 8, 8, 8)

        self.title_label = QLabel("Select a task to see details")
        self.title_label.setWordWrap(True)
        self.title_label.setFont(QFont("Segoe UI Semibold", 12))
        self.title_label.setProperty("class", "titleLabel")
        self.meta_label = QLabel("")
        self.meta_label.setWordWrap(True)
        self.desc_view = QTextEdit()
        self.desc_view.setReadOnly(True)
        self.desc_view.setFixedHeight(110)
        self.subtasks_view = QListWidget()
        self.subtasks_view.setFixedHeight(110)
        self.subtasks_view.itemChanged.connect(self.on_subtask_toggled)
        self.notes_view = QLabel("")
        self.notes_view.setWordWrap(True)

        btn_layout = QHBoxLayout()
        self.edit_btn = QPushButton("Edit")
        self.edit_btn.clicked.connect(lambda: self.on_item_action("edit", self.selected_task_id))
        self.complete_btn = QPushButton("Complete")
        self.complete_btn.clicked.connect(lambda: self.on_item_action("complete", self.selected_task_id))
        self.delete_btn = QPushButton("Delete")
        self.delete_btn.clicked.connect(lambda: self.on_item_action("delete", self.selected_task_id))
        btn_layout.addWidget(self.edit_btn)
        btn_layout.addWidget(self.complete_btn)
        btn_layout.addWidget(self.delete_btn)

        details_layout.addWidget(self.title_label)
        details_layout.addWidget(self.meta_label)
        details_layout.addWidget(self.desc_view)
        details_layout.addWidget(QLabel("Subtasks"))
        details_layout.addWidget(self.subtasks_view)
        details_layout.addWidget(self.notes_view)
        details_layout.addLayout(btn_layout)
        details_layout.addStretch()

        splitter.addWidget(details)
        splitter.setStretchFactor(0, 3)
        splitter.setStretchFactor(1, 1)

        self.stack.addWidget(splitter)
        self.analytics_view = AnalyticsView(self.session)
        self.stack.addWidget(self.analytics_view)
        v.addWidget(self.stack, 1)

        self.setCentralWidget(central)

        self.status = QStatusBar(self)
        self.setStatusBar(self.status)

        delete_shortcut = QAction(self)
        delete_shortcut.setShortcut("Delete")
        delete_shortcut.triggered.connect(lambda: self.on_item_action("delete", self.selected_task_id))
        self.addAction(delete_shortcut)
        escape_shortcut = QAction(self)
        escape_shortcut.setShortcut("Escape")
        escape_shortcut.triggered.connect(self.vm.selection.cancel)
        self.addAction(escape_shortcut)

        self._clear_details()

    def _fill_category_filter(self):
        current = self.category_filter.currentData() or ""
        self.category_filter.blockSignals(True)
        self.category_filter.clear()
        self.category_filter.addItem("All Categories", "")
        for c in dict.fromkeys(CATEGORIES + self.vm.categories()):
            self.category_filter.addItem(c, c)
        idx = self.category_filter.findData(current)
        self.category_filter.setCurrentIndex(max(idx, 0))
        self.category_filter.blockSignals(False)

    # ---- rendering ----

    def render_tasks(self, tasks):
        selection = self.vm.selection
        self._rendering = True
        try:
            self.task_list.clear()
            for t in tasks:
                item = QListWidgetItem()
                self._decorate_item(item, t)
                if selection.active:
                    item.setFlags(item.flags() | Qt.ItemIsUserCheckable)
                    item.setCheckState(Qt.Checked if selection.is_selected(t.id) else Qt.Unchecked)
                self.task_list.addItem(item)
                if t.id == self.selected_task_id:
                    item.setSelected(True)
        finally:
            self._rendering = False

        n = len(tasks)
        self.count_label.setText(f"{n} {'task' if n == 1 else 'tasks'}")
        self.empty_label.setVisible(n == 0)
        self.task_list.setVisible(n > 0)
        self.update_status_bar()

        # details follow the store, not the filtered view
        if self.selected_task_id:
            t = self.session.tasks.get_task(self.selected_task_id)
            if t:
                self._show_task_in_details(t)
            else:
                self._clear_details()

    def _decorate_item(self, item: QListWidgetItem, t: Task):
        today = self.session.clock()
        item.setText(f"{t.title}    [{t.category}]")
        item.setData(Qt.UserRole, t.id)
        item.setIcon(_dot_icon(PRIORITY_COLORS.get((t.priority or "").lower(), "#cccccc")))
        item.setForeground(QBrush(QColor("#0f1722")))

        tooltip = f"Due: {format_date(t.due_date)}\nPriority: {t.priority}\nStatus: {t.status}"
        if t.description:
            tooltip += f"\n{t.description[:180]}"
        if t.subtasks:
            done = sum(1 for s in t.subtasks if s.completed)
            tooltip += f"\nSubtasks: {done}/{len(t.subtasks)}"
        item.setToolTip(tooltip)

        fnt = item.font()
        if t.is_completed:
            fnt.setStrikeOut(True)
            item.setFont(fnt)
            item.setForeground(QBrush(QColor("#9ca3af")))
            return
        due = parse_date_string(t.due_date)
        if due:
            if due < today:
                item.setBackground(QBrush(QColor("#ffe6e6")))  # overdue → light red
            elif (due - today).days <= self.settings.due_soon_days:
                fnt.setBold(True)
                item.setFont(fnt)
                item.setBackground(QBrush(QColor("#fff4e0")))

    def _show_task_in_details(self, t: Task):
        self.selected_task_id = t.id
        self.title_label.setText(t.title)
        today = self.session.clock()
        parts = [
            f"<b>Category:</b> {t.category or '—'}",
            f"<b>Priority:</b> {t.priority}",
            f"<b>Status:</b> {t.status}",
        ]
        due_str = format_date(t.due_date)
        d = parse_date_string(t.due_date)
        if d and not t.is_completed:
            if d < today:
                due_str += "  (<b>OVERDUE</b>)"
            elif (d - today).days <= self.settings.due_soon_days:
                due_str += "  (<b>Due soon</b>)"
        parts.append(f"<b>Due date:</b> {due_str}")
        parts.append(f"<b>Assigned to:</b> {t.assigned_to or '—'}")
        parts.append(f"<b>Created:</b> {format_date(t.created_at)}")
        if t.completed_at:
            parts.append(f"<b>Completed:</b> {format_date(t.completed_at)}")
        self.meta_label.setText("<br/>".join(parts))
        self.desc_view.setPlainText(t.description or "")

        self.subtasks_view.blockSignals(True)
        self.subtasks_view.clear()
        for s in t.subtasks:
            it = QListWidgetItem(s.title)
            it.setFlags(it.flags() | Qt.ItemIsUserCheckable)
            it.setCheckState(Qt.Checked if s.completed else Qt.Unchecked)
            it.setData(Qt.UserRole, s.id)
            self.subtasks_view.addItem(it)
        self.subtasks_view.blockSignals(False)

        self.notes_view.setText(f"<b>Notes:</b> {t.notes}" if t.notes else "")
        for b in (self.edit_btn, self.delete_btn):
            b.setEnabled(True)
        self.complete_btn.setEnabled(not t.is_completed)

    def _clear_details(self):
        self.selected_task_id = None
        self.title_label.setText("Select a task to see details")
        self.meta_label.setText("")
        self.desc_view.setPlainText("")
        self.subtasks_view.clear()
        self.notes_view.setText("")
        for b in (self.edit_btn, self.complete_btn, self.delete_btn):
            b.setEnabled(False)

    def on_tasks_changed(self):
        summary = analytics.summary(self.session.tasks.tasks, self.session.clock())
        for key, label in self.stat_labels.items():
            label.setText(str(getattr(summary, key)))
        self.stat_labels["completed"].setText(f"{summary.completed}  ({summary.completion_rate:.0%})")
        self._fill_category_filter()
        self.update_status_bar()

    def update_status_bar(self):
        by_priority = {p: 0 for p in PRIORITIES}
        for t in self.session.tasks.tasks:
            by_priority[t.priority] = by_priority.get(t.priority, 0) + 1
        legend = "  ".join(f"{p}: {by_priority[p]}" for p in PRIORITIES)
        shown = len(self.vm.visible_tasks)
        filtered = " (filtered)" if self.vm.criteria.is_filtered else ""
        self.status.showMessage(f"Showing {shown} of {len(self.session.tasks)}{filtered}  |  {legend}")

    def update_clock(self):
        elapsed = int(time.monotonic() - self._session_started)
        h, rem = divmod(elapsed, 3600)
        m, s = divmod(rem, 60)
        self.clock_label.setText(f"{h:02d}:{m:02d}:{s:02d}")

    def refresh_notifications(self):
        store = self.session.notifications
        unread = store.unread_count
        self.notifications_btn.setText(f"Notifications ({unread})" if unread else "Notifications")
        self.notifications_menu.clear()
        if not store.notifications:
            empty = self.notifications_menu.addAction("No notifications")
            empty.setEnabled(False)
            return
        for n in store.notifications:
            act = self.notifications_menu.addAction(
                f"{'' if n.read else '● '}{n.title} — {n.message} ({format_date(n.created_at)})"
            )
            act.triggered.connect(lambda _checked=False, nid=n.id: store.mark_as_read(nid))
        self.notifications_menu.addSeparator()
        mark_all = self.notifications_menu.addAction("Mark all as read")
        mark_all.setEnabled(unread > 0)
        mark_all.triggered.connect(store.mark_all_as_read)

    def refresh_user(self, user):
        if user is None:
            self.user_label.setText("")
            return
        self.user_label.setText(f"{user.name}  ·  {user.role}" if user.role else user.name)
        idx = self.presence_cb.findData(user.status)
        if idx >= 0 and idx != self.presence_cb.currentIndex():
            self.presence_cb.blockSignals(True)
            self.presence_cb.setCurrentIndex(idx)
            self.presence_cb.blockSignals(False)

    # ---- handlers ----

    def _run(self, title: str, fn, *args):
        try:
            return fn(*args)
        except TaskboardError as e:
            QMessageBox.warning(self, title, str(e))
            return None

    def on_add_task(self):
        dlg = AddEditTaskDialog(self, submit=self.session.add_task, categories=self.vm.categories())
        if dlg.exec() == QDialog.Accepted and dlg.result_task:
            self.status.showMessage(f"Added '{dlg.result_task.title}'", 4000)

    def on_item_action(self, action: str, task_id: str):
        if action == "add":
            self.on_add_task()
            return
        t = self.session.tasks.get_task(task_id) if task_id else None
        if t is None:
            if action in ("edit", "delete", "complete"):
                QMessageBox.information(self, action.capitalize(), "Select a task first")
            return

        if action == "edit":
            dlg = AddEditTaskDialog(
                self,
                task=t,
                submit=lambda data: self.session.edit_task(t.id, data),
                categories=self.vm.categories(),
            )
            dlg.exec()
        elif action == "complete":
            self._run("Complete", self.session.complete_task, t.id)
        elif action == "delete":
            ok = QMessageBox.question(self, "Delete", f"Delete task '{t.title}'?")
            if ok == QMessageBox.StandardButton.Yes:
                self._run("Delete", self.session.delete_task, t.id)
        elif action == "details":
            self._show_task_in_details(t)

    def on_list_selection_changed(self):
        sel = self.task_list.selectedItems()
        if not sel:
            return
        t = self.session.tasks.get_task(sel[0].data(Qt.UserRole))
        if t:
            self._show_task_in_details(t)

    def on_item_check_changed(self, item: QListWidgetItem):
        if self._rendering or not self.vm.selection.active:
            return
        self.vm.selection.toggle(item.data(Qt.UserRole), item.checkState() == Qt.Checked)

    def on_subtask_toggled(self, item: QListWidgetItem):
        t = self.session.tasks.get_task(self.selected_task_id) if self.selected_task_id else None
        if t is None:
            return
        sub_id = item.data(Qt.UserRole)
        checked = item.checkState() == Qt.Checked
        subtasks = [
            Subtask(id=s.id, title=s.title, completed=checked if s.id == sub_id else s.completed)
            for s in t.subtasks
        ]
        # the details panel is rebuilt by the update, so leave this signal first
        QTimer.singleShot(0, lambda: self._run("Subtasks", self.session.update_task, t.id, {"subtasks": subtasks}))

    def on_selection_changed(self):
        selection = self.vm.selection
        n = selection.count
        self.selection_bar.setVisible(selection.active and n > 0)
        self.selected_count_label.setText(f"<b>{n}</b> {'task' if n == 1 else 'tasks'} selected")
        self.select_btn.setText("Cancel selection" if selection.active else "Select")
        self.select_btn.clicked.disconnect()
        self.select_btn.clicked.connect(selection.cancel if selection.active else selection.enter)
        if selection.active != self._selection_mode:
            # checkboxes appear / disappear with the mode; rebuild after the
            # current item signal has returned
            self._selection_mode = selection.active
            QTimer.singleShot(0, lambda: self.render_tasks(list(self.vm.visible_tasks)))
        else:
            self._sync_check_states()

    def _sync_check_states(self):
        selection = self.vm.selection
        self._rendering = True
        try:
            for i in range(self.task_list.count()):
                item = self.task_list.item(i)
                state = Qt.Checked if selection.is_selected(item.data(Qt.UserRole)) else Qt.Unchecked
                if item.checkState() != state:
                    item.setCheckState(state)
        finally:
            self._rendering = False

    def on_complete_selected(self):
        n = self._run("Mark Complete", self.vm.complete_selected)
        if n is not None:
            self.status.showMessage(f"Marked {n} task(s) complete", 4000)

    def on_delete_selected_batch(self):
        n = self.vm.selection.count
        ok = QMessageBox.question(self, "Delete", f"Delete {n} selected task(s)?")
        if ok == QMessageBox.StandardButton.Yes:
            removed = self._run("Delete", self.vm.delete_selected)
            if removed is not None:
                self.status.showMessage(f"Deleted {removed} task(s)", 4000)

    def on_toggle_sort_direction(self):
        self.vm.toggle_sort_direction()

    def on_criteria_changed(self, criteria):
        self.clear_filters_btn.setEnabled(criteria.is_filtered)
        self._update_sort_direction_button()
        self.update_status_bar()

    def _update_sort_direction_button(self):
        asc = self.vm.criteria.sort_direction is SortDirection.ASC
        self.sort_direction_btn.setText("↑ Asc" if asc else "↓ Desc")

    def clear_filters(self):
        for w in (self.category_filter, self.priority_filter, self.status_filter, self.date_filter):
            w.blockSignals(True)
            w.setCurrentIndex(0)
            w.blockSignals(False)
        self.search.blockSignals(True)
        self.search.setText("")
        self.search.blockSignals(False)
        self.vm.clear_filters()

    def on_presence_changed(self, _index):
        status = self.presence_cb.currentData()
        try:
            self.session.auth.update_user_status(status)
        except ValidationError as e:
            QMessageBox.warning(self, "Status", str(e))

    def on_profile(self):
        ProfileDialog(self.session.auth, self).exec()

    def on_logout(self):
        self.clock_timer.stop()
        self.session.auth.logout()
        self.close()
        self.logged_out.emit()

    def closeEvent(self, event):
        self.clock_timer.stop()
        if self.session.user is not None:
            self.closed.emit()
        super().closeEvent(event)

    # Export/Import handlers
    def on_export_csv(self):
        path, _ = QFileDialog.getSaveFileName(
            self, "Export CSV", str(Path.home() / "tasks.csv"), "CSV Files (*.csv)"
        )
        if not path:
            return
        n = export_service.export_tasks_to_csv(self.vm.visible_tasks, path)
        self.session.notifications.add_notification("Export finished", f"Exported {n} tasks to {Path(path).name}")
        QMessageBox.information(self, "Export", f"Exported {n} tasks to {path}")

    def on_export_xlsx(self):
        path, _ = QFileDialog.getSaveFileName(
            self,
            "Export Excel",
            str(Path.home() / "tasks.xlsx"),
            "Excel Files (*.xlsx)",
        )
        if not path:
            return
        n = export_service.export_tasks_to_excel(self.vm.visible_tasks, path)
        self.session.notifications.add_notification("Export finished", f"Exported {n} tasks to {Path(path).name}")
        QMessageBox.information(self, "Export", f"Exported {n} tasks to {path}")

    def on_import_csv(self):
        path, _ = QFileDialog.getOpenFileName(
            self, "Import CSV", str(Path.home()), "CSV Files (*.csv)"
        )
        if not path:
            return
        try:
            drafts = export_service.import_task_drafts_from_csv(path)
        except (OSError, UnicodeDecodeError) as e:
            logger.exception("CSV import failed path=%s", path)
            QMessageBox.warning(self, "Import", f"Could not read {path}: {e}")
            return
        imported, skipped = 0, 0
        for draft in drafts:
            try:
                self.session.add_task(draft)
                imported += 1
            except ValidationError as e:
                skipped += 1
                logger.warning("Skipped CSV row title=%r: %s", draft.get("title"), e)
        msg = f"Imported {imported} tasks from {path}"
        if skipped:
            msg += f"\nSkipped {skipped} invalid row(s)."
        self.session.notifications.add_notification(
            "Import finished", f"Imported {imported} tasks from {Path(path).name}, skipped {skipped}"
        )
        QMessageBox.information(self, "Import", msg)

    def on_about(self):
        QMessageBox.information(
            self,
            "About",
            f"{self.settings.app_name}\nTask list with search, filters, sorting, batch selection "
            f"and analytics.\n\nToday: {date.today().isoformat()}",
        )
