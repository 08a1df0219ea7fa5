from PySide6.QtCharts import (
    QBarCategoryAxis,
    QBarSeries,
    QBarSet,
    QChart,
    QChartView,
    QPieSeries,
    QValueAxis,
)
from PySide6.QtCore import Qt
from PySide6.QtGui import QColor, QPainter
from PySide6.QtWidgets import QGridLayout, QLabel, QVBoxLayout, QWidget

from services import analytics

STATUS_COLORS = {"Active": "#3b82f6", "Completed": "#22c55e"}
PRIORITY_COLORS = {"High": "#ef4444", "Medium": "#facc15", "Low": "#22c55e"}
CATEGORY_COLORS = [
    "#3b82f6", "#22c55e", "#ef4444", "#facc15", "#8b5cf6",
    "#ec4899", "#14b8a6", "#f97316", "#6366f1",
]
TIMELINE_COLOR = "#5D5CDE"


def _pie_chart(title: str, counts: dict, colors) -> QChart:
    series = QPieSeries()
    for i, (label, value) in enumerate(counts.items()):
        if not value:
            continue
        sl = series.append(f"{label} ({value})", value)
        color = colors.get(label) if isinstance(colors, dict) else colors[i % len(colors)]
        if color:
            sl.setBrush(QColor(color))
    chart = QChart()
    chart.addSeries(series)
    chart.setTitle(title)
    chart.legend().setAlignment(Qt.AlignBottom)
    return chart


def _timeline_chart(points) -> QChart:
    bar_set = QBarSet("Tasks Completed")
    bar_set.setColor(QColor(TIMELINE_COLOR))
    labels = []
    for day, count in points:
        bar_set.append(count)
        labels.append(day.strftime("%b %d"))
    series = QBarSeries()
    series.append(bar_set)

    chart = QChart()
    chart.addSeries(series)
    chart.setTitle("Task Completion Timeline")
    axis_x = QBarCategoryAxis()
    axis_x.append(labels)
    chart.addAxis(axis_x, Qt.AlignBottom)
    series.attachAxis(axis_x)
    axis_y = QValueAxis()
    axis_y.setLabelFormat("%d")
    axis_y.setRange(0, max([c for _, c in points] + [1]))
    chart.addAxis(axis_y, Qt.AlignLeft)
    series.attachAxis(axis_y)
    chart.legend().setAlignment(Qt.AlignBottom)
    return chart


class AnalyticsView(QWidget):
    """Four charts over the whole task collection, rebuilt on every change."""

    def __init__(self, session, parent=None):
        super().__init__(parent)
        self.session = session
        layout = QVBoxLayout(self)
        title = QLabel("Task Analytics")
        title.setProperty("class", "titleLabel")
        layout.addWidget(title)
        grid = QGridLayout()
        layout.addLayout(grid)

        self.views = []
        for i in range(4):
            view = QChartView()
            view.setRenderHint(QPainter.Antialiasing)
            view.setMinimumHeight(260)
            grid.addWidget(view, i // 2, i % 2)
            self.views.append(view)

        session.tasks.tasks_changed.connect(self.refresh)
        self.refresh()

    def refresh(self):
        tasks = self.session.tasks.tasks
        today = self.session.clock()
        charts = [
            _pie_chart("Task Status", analytics.status_counts(tasks), STATUS_COLORS),
            _pie_chart("Priority Distribution", analytics.priority_counts(tasks), PRIORITY_COLORS),
            _timeline_chart(analytics.completion_timeline(tasks, today)),
            _pie_chart("Category Distribution", analytics.category_counts(tasks), CATEGORY_COLORS),
        ]
        for view, chart in zip(self.views, charts):
            old = view.chart()
            view.setChart(chart)
            if old is not None:
                old.deleteLater()
