from PySide6.QtCore import Qt, QDate
from PySide6.QtWidgets import (
    QComboBox,
    QDateEdit,
    QDialog,
    QDialogButtonBox,
    QFormLayout,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QListWidget,
    QListWidgetItem,
    QMessageBox,
    QPushButton,
    QTextEdit,
    QVBoxLayout,
    QWidget,
)

from models.task import CATEGORIES, PRIORITIES, STATUSES, Subtask, Task
from models.user import User
from services.dates import parse_date_string
from services.errors import TaskboardError, ValidationError


class AddEditTaskDialog(QDialog):
    """Add or edit a task. ``submit`` is called with the draft on OK.

    ``submit`` may raise a TaskboardError; the dialog then stays open and
    shows the message, so a rejected form changes nothing.
    """

    def __init__(self, parent=None, task: Task = None, submit=None, categories=None):
        super().__init__(parent)
        self.setWindowTitle("Edit Task" if task else "Add New Task")
        self.task = task
        self.submit = submit
        self.result_task = None
        self.build_ui(categories or [])
        if task:
            self.load_task(task)
        else:
            # default: today's date for new tasks
            self.due_date.setDate(QDate.currentDate())

    def build_ui(self, categories):
        self.form = QFormLayout(self)
        self.title_edit = QLineEdit()
        self.title_edit.setPlaceholderText("Task title")
        self.desc_edit = QTextEdit()
        self.desc_edit.setFixedHeight(80)
        self.category_cb = QComboBox()
        self.category_cb.setEditable(True)
        self.category_cb.addItems(list(dict.fromkeys(CATEGORIES + list(categories))))
        self.category_cb.setCurrentIndex(-1)
        self.priority_cb = QComboBox()
        self.priority_cb.addItems(PRIORITIES)
        self.priority_cb.setCurrentIndex(-1)
        self.status_cb = QComboBox()
        self.status_cb.addItems(STATUSES)
        self.due_date = QDateEdit()
        self.due_date.setCalendarPopup(True)
        self.due_date.setDisplayFormat("dd/MM/yyyy")
        self.assignee_edit = QLineEdit()
        self.assignee_edit.setPlaceholderText("user id (defaults to you)")
        self.notes_edit = QTextEdit()
        self.notes_edit.setFixedHeight(60)

        # subtasks: editable rows with a checkbox for completion
        self.subtasks_list = QListWidget()
        self.subtasks_list.setFixedHeight(100)
        sub_buttons = QHBoxLayout()
        add_sub_btn = QPushButton("+ Subtask")
        add_sub_btn.clicked.connect(lambda: self._add_subtask_row(Subtask()))
        remove_sub_btn = QPushButton("Remove")
        remove_sub_btn.clicked.connect(self._remove_subtask_row)
        sub_buttons.addWidget(add_sub_btn)
        sub_buttons.addWidget(remove_sub_btn)
        sub_buttons.addStretch()
        sub_box = QWidget()
        sub_layout = QVBoxLayout(sub_box)
        sub_layout.setContentsMargins(0, 0, 0, 0)
        sub_layout.addWidget(self.subtasks_list)
        sub_layout.addLayout(sub_buttons)

        self.form.addRow("Title*", self.title_edit)
        self.form.addRow("Description", self.desc_edit)
        self.form.addRow("Category*", self.category_cb)
        self.form.addRow("Priority*", self.priority_cb)
        if self.task:
            self.form.addRow("Status", self.status_cb)
        self.form.addRow("Due date*", self.due_date)
        self.form.addRow("Assigned to", self.assignee_edit)
        self.form.addRow("Subtasks", sub_box)
        self.form.addRow("Notes", self.notes_edit)

        self.buttons = QDialogButtonBox(QDialogButtonBox.Ok | QDialogButtonBox.Cancel)
        self.buttons.accepted.connect(self.accept)
        self.buttons.rejected.connect(self.reject)
        self.form.addRow(self.buttons)

    def _add_subtask_row(self, subtask: Subtask):
        item = QListWidgetItem(subtask.title)
        item.setFlags(item.flags() | Qt.ItemIsEditable | Qt.ItemIsUserCheckable)
        item.setCheckState(Qt.Checked if subtask.completed else Qt.Unchecked)
        item.setData(Qt.UserRole, subtask.id)
        self.subtasks_list.addItem(item)
        if not subtask.title:
            self.subtasks_list.editItem(item)

    def _remove_subtask_row(self):
        row = self.subtasks_list.currentRow()
        if row >= 0:
            self.subtasks_list.takeItem(row)

    def load_task(self, task: Task):
        self.title_edit.setText(task.title)
        self.desc_edit.setText(task.description or "")
        self.category_cb.setCurrentText(task.category)
        self.priority_cb.setCurrentText(task.priority)
        self.status_cb.setCurrentText(task.status)
        d = parse_date_string(task.due_date)
        self.due_date.setDate(QDate(d.year, d.month, d.day) if d else QDate.currentDate())
        self.assignee_edit.setText(task.assigned_to or "")
        self.notes_edit.setText(task.notes or "")
        for s in task.subtasks:
            self._add_subtask_row(s)

    def get_task_data(self) -> dict:
        subtasks = []
        for i in range(self.subtasks_list.count()):
            it = self.subtasks_list.item(i)
            subtasks.append({
                "id": it.data(Qt.UserRole),
                "title": it.text(),
                "completed": it.checkState() == Qt.Checked,
            })
        data = {
            "title": self.title_edit.text(),
            "description": self.desc_edit.toPlainText(),
            "category": self.category_cb.currentText(),
            "priority": self.priority_cb.currentText(),
            "due_date": self.due_date.date().toString("yyyy-MM-dd"),
            "assigned_to": self.assignee_edit.text().strip(),
            "notes": self.notes_edit.toPlainText(),
            "subtasks": subtasks,
        }
        if self.task:
            data["status"] = self.status_cb.currentText()
        return data

    def accept(self):
        if self.submit is not None:
            try:
                self.result_task = self.submit(self.get_task_data())
            except TaskboardError as e:
                QMessageBox.warning(self, "Validation", str(e))
                return
        super().accept()


class LoginDialog(QDialog):
    def __init__(self, auth, parent=None):
        super().__init__(parent)
        self.auth = auth
        self.setWindowTitle("To-Do APP - Sign in")
        form = QFormLayout(self)
        self.email_edit = QLineEdit()
        self.email_edit.setPlaceholderText("Email")
        self.password_edit = QLineEdit()
        self.password_edit.setEchoMode(QLineEdit.Password)
        self.password_edit.setPlaceholderText("Password")
        self.error_label = QLabel("")
        self.error_label.setStyleSheet("color: #ef4444;")

        form.addRow("Email", self.email_edit)
        form.addRow("Password", self.password_edit)
        form.addRow(self.error_label)

        buttons = QDialogButtonBox(QDialogButtonBox.Ok | QDialogButtonBox.Cancel)
        buttons.button(QDialogButtonBox.Ok).setText("Sign in")
        register_btn = buttons.addButton("Register...", QDialogButtonBox.ActionRole)
        register_btn.clicked.connect(self.on_register)
        buttons.accepted.connect(self.accept)
        buttons.rejected.connect(self.reject)
        form.addRow(buttons)

    def accept(self):
        self.error_label.setText("")
        if not self.auth.login(self.email_edit.text(), self.password_edit.text()):
            self.error_label.setText("Invalid email or password")
            return
        super().accept()

    def on_register(self):
        dlg = RegisterDialog(self.auth, self)
        if dlg.exec() == QDialog.Accepted:
            super().accept()


class RegisterDialog(QDialog):
    def __init__(self, auth, parent=None):
        super().__init__(parent)
        self.auth = auth
        self.setWindowTitle("Create account")
        form = QFormLayout(self)
        self.fields = {}
        for key, label, secret in (
            ("name", "Full name*", False),
            ("email", "Email*", False),
            ("email_confirm", "Confirm email*", False),
            ("password", "Password*", True),
            ("password_confirm", "Confirm password*", True),
            ("role", "Role", False),
        ):
            edit = QLineEdit()
            if secret:
                edit.setEchoMode(QLineEdit.Password)
            self.fields[key] = edit
            form.addRow(label, edit)
        self.error_label = QLabel("")
        self.error_label.setStyleSheet("color: #ef4444;")
        form.addRow(self.error_label)
        buttons = QDialogButtonBox(QDialogButtonBox.Ok | QDialogButtonBox.Cancel)
        buttons.accepted.connect(self.accept)
        buttons.rejected.connect(self.reject)
        form.addRow(buttons)

    def accept(self):
        self.error_label.setText("")
        try:
            self.auth.register({k: w.text() for k, w in self.fields.items()})
        except ValidationError as e:
            self.error_label.setText(str(e))
            return
        super().accept()


class ProfileDialog(QDialog):
    def __init__(self, auth, parent=None):
        super().__init__(parent)
        self.auth = auth
        user: User = auth.user
        self.setWindowTitle("User Profile")
        form = QFormLayout(self)
        self.name_edit = QLineEdit(user.name if user else "")
        self.role_edit = QLineEdit(user.role if user else "")
        email = QLabel(user.email if user else "")
        email.setTextInteractionFlags(Qt.TextSelectableByMouse)
        form.addRow("Name", self.name_edit)
        form.addRow("Email", email)
        form.addRow("Role", self.role_edit)
        buttons = QDialogButtonBox(QDialogButtonBox.Save | QDialogButtonBox.Cancel)
        buttons.accepted.connect(self.accept)
        buttons.rejected.connect(self.reject)
        form.addRow(buttons)

    def accept(self):
        self.auth.update_profile(name=self.name_edit.text(), role=self.role_edit.text())
        super().accept()
