from PySide6.QtCore import QObject, Signal, QThread, Qt
from PySide6.QtWidgets import (
    QMainWindow,
    QWidget,
    QVBoxLayout,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QLineEdit,
    QFileDialog,
    QMessageBox,
    QGroupBox,
    QFormLayout,
    QProgressBar,
)

from domain.errors import InvalidInputError
from domain.models import CancellationHandle, CopyJob, CopyProgress, RunOutcome
from domain.rules import build_job
from services.repeat_copy_service import RepeatCopyService
from utils.sizefmt import describe_source


class Worker(QObject):
    # Emitted from the worker thread; Qt queues them onto the UI thread.
    progress = Signal(object)   # CopyProgress
    finished = Signal(object)   # RunOutcome

    def __init__(self, service: RepeatCopyService, job: CopyJob, cancel: CancellationHandle):
        super().__init__()
        self.service = service
        self.job = job
        self.cancel = cancel

    def run(self):
        outcome = self.service.run(self.job, self.cancel, self.progress.emit)
        self.finished.emit(outcome)


class MainWindow(QMainWindow):
    def __init__(self, settings: dict, run_logger=None):
        super().__init__()
        self.setWindowTitle("Terminal Server File Copy")

        self.destination = settings["destination_dir"]
        self.service = RepeatCopyService(run_logger=run_logger)

        self.source_path = None
        self.cancel_handle = CancellationHandle()
        self.worker = None
        self.thread = None

        central = QWidget()
        v = QVBoxLayout(central)
        v.setContentsMargins(24, 24, 24, 24)
        v.setSpacing(14)

        card = QGroupBox("Copy")
        form = QFormLayout(card)
        form.setLabelAlignment(Qt.AlignLeft)
        form.setHorizontalSpacing(12)
        form.setVerticalSpacing(10)

        self.file_name_label = QLabel("")
        self.file_size_label = QLabel("")
        self.location_label = QLabel("")
        self.times_edit = QLineEdit(str(settings["repeat_count"]))
        self.times_edit.setMinimumHeight(32)

        file_btn = QPushButton("Choose file…")
        file_btn.clicked.connect(self.pick_file)

        form.addRow(file_btn)
        form.addRow("File", self.file_name_label)
        form.addRow("Size", self.file_size_label)
        form.addRow("Copy to", self.location_label)
        form.addRow("Times", self.times_edit)
        v.addWidget(card)

        self.transfer_time = QLabel("")
        self.transfer_time.setTextInteractionFlags(Qt.TextSelectableByMouse)
        v.addWidget(self.transfer_time)

        self.progress_bar = QProgressBar()
        self.progress_bar.setVisible(False)
        v.addWidget(self.progress_bar)

        btns = QHBoxLayout()
        self.cancel_btn = QPushButton("Cancel")
        self.cancel_btn.setVisible(False)
        self.cancel_btn.clicked.connect(self.request_cancel)
        self.copy_btn = QPushButton("Copy")
        self.copy_btn.setMinimumHeight(36)
        self.copy_btn.clicked.connect(self.start_copy)
        btns.addWidget(self.cancel_btn)
        btns.addStretch(1)
        btns.addWidget(self.copy_btn)
        v.addLayout(btns)
        v.addStretch(1)

        self.setCentralWidget(central)

    def pick_file(self):
        p, _ = QFileDialog.getOpenFileName(self, "Select file to copy")
        if not p:
            return
        self.source_path = p
        name, size_label = describe_source(p)
        self.file_name_label.setText(name)
        self.file_size_label.setText(size_label)
        self.transfer_time.setText("")

    def start_copy(self):
        self.transfer_time.setText("")
        try:
            job, warnings = build_job(self.source_path, self.destination, self.times_edit.text())
        except InvalidInputError as e:
            QMessageBox.critical(self, "Input error", str(e))
            return

        for w in warnings:
            QMessageBox.warning(self, "Input error", w)

        self.location_label.setText(self.destination)
        self._set_running(True, job.repeat_count)

        self.thread = QThread()
        self.worker = Worker(self.service, job, self.cancel_handle)
        self.worker.moveToThread(self.thread)

        self.worker.progress.connect(self.on_progress)
        self.worker.finished.connect(self.on_finished)

        self.thread.started.connect(self.worker.run)
        self.thread.start()

    def request_cancel(self):
        self.cancel_handle.cancel()
        self.transfer_time.setText("Cancel requested. Will stop after current copy.")

    def on_progress(self, p: CopyProgress):
        self.progress_bar.setValue(p.cycle_index)
        self.transfer_time.setText(p.display())

    def on_finished(self, outcome: RunOutcome):
        if self.thread:
            self.thread.quit()
            self.thread.wait()
            self.thread = None
        self.worker = None

        # Handles are one-shot; the next run needs an unsignalled one.
        self.cancel_handle = CancellationHandle()
        self._set_running(False)

        if outcome.is_failed:
            QMessageBox.critical(self, "Copy failed", outcome.reason)

    def _set_running(self, running: bool, total: int = 0):
        self.copy_btn.setEnabled(not running)
        self.cancel_btn.setVisible(running)
        self.progress_bar.setVisible(running)
        if running:
            self.progress_bar.setRange(0, total)
            self.progress_bar.setValue(0)
