"""
Tabbed Qt GUI for the random password generator.

Tabs:
- Generator: alphabet, length and count controls plus the output area
- About: usage notes
"""

from __future__ import annotations

import logging
import random
import sys
from typing import Optional

from PySide6.QtCore import Qt, QThread, QTimer, Slot
from PySide6.QtGui import QCloseEvent, QFont, QFontDatabase
from PySide6.QtWidgets import (
    QApplication,
    QComboBox,
    QFileDialog,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QMainWindow,
    QMessageBox,
    QPlainTextEdit,
    QPushButton,
    QTabWidget,
    QVBoxLayout,
    QWidget,
)

from .config import (
    COUNT_CHOICES,
    DEFAULT_ALPHABET,
    DEFAULT_CONFIG,
    FONT_SIZES,
    LENGTH_CHOICES,
    PROGRAM_TITLE,
    STATUS_INTERVAL_MS,
    RandomPassConfig,
)
from .errors import InvalidCount, InvalidLength, ValidationError, WriteFailure
from .export import write_passwords
from .sampler import GenerationRequest, GenerationResult, validate
from .worker import GeneratorWorker

logger = logging.getLogger(__name__)


def _editable_combo(choices: tuple[str, ...], current: object) -> QComboBox:
    combo = QComboBox()
    combo.setEditable(True)
    combo.addItems(list(choices))
    combo.setCurrentText(str(current))
    return combo


# ---------- Generator Tab ----------


class GeneratorTab(QWidget):
    """
    Generator tab: controls, output area and status line.
    """

    def __init__(
        self,
        config: RandomPassConfig | None = None,
        seed: int | None = None,
        parent: Optional[QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self.config = config or DEFAULT_CONFIG
        self.seed = seed
        # One generator for the life of the tab, so a seeded session gives
        # different passwords on each Start but repeats across sessions.
        self._rng = random.Random(seed)
        self._request: GenerationRequest | None = None

        self._thread: QThread | None = None
        self._worker: GeneratorWorker | None = None

        # Status text is only pushed to the label on timer ticks while a run
        # is active, so fast runs don't flicker.
        self._status_pending = ""
        self._status_timer = QTimer(self)
        self._status_timer.setInterval(STATUS_INTERVAL_MS)
        self._status_timer.timeout.connect(self._on_status_tick)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(20, 20, 20, 20)
        layout.setSpacing(16)

        layout.addWidget(self._build_config_group())
        layout.addWidget(self._build_output_group(), 1)
        layout.addWidget(self._build_status_label())

        self._apply_output_font()
        self._set_running(False)

    # -- groups --

    def _build_config_group(self) -> QGroupBox:
        group = QGroupBox("Configuration")
        layout = QVBoxLayout()
        layout.setContentsMargins(12, 12, 12, 12)
        layout.setSpacing(10)

        alphabet_label = QLabel("Alphabet (available characters, repeats are more likely)")
        self.alphabet_edit = QLineEdit(self.config.alphabet)
        self.alphabet_edit.setPlaceholderText(DEFAULT_ALPHABET)
        self.alphabet_edit.returnPressed.connect(self.on_start_clicked)

        counts_row = QHBoxLayout()
        counts_row.addWidget(QLabel("Generate"))
        self.number_combo = _editable_combo(COUNT_CHOICES, self.config.password_count)
        counts_row.addWidget(self.number_combo)
        counts_row.addWidget(QLabel("passwords of"))
        self.length_combo = _editable_combo(LENGTH_CHOICES, self.config.password_length)
        counts_row.addWidget(self.length_combo)
        counts_row.addWidget(QLabel("characters"))
        counts_row.addStretch()

        font_row = QHBoxLayout()
        font_row.addWidget(QLabel("Output font"))
        self.font_name_combo = QComboBox()
        self.font_name_combo.addItems(QFontDatabase.families())
        font_name = self.config.font_name or QFontDatabase.systemFont(
            QFontDatabase.FixedFont
        ).family()
        self.font_name_combo.setCurrentText(font_name)
        self.font_name_combo.currentTextChanged.connect(self._apply_output_font)
        font_row.addWidget(self.font_name_combo, 1)

        self.font_size_combo = _editable_combo(FONT_SIZES, self.config.font_size)
        self.font_size_combo.currentTextChanged.connect(self._apply_output_font)
        font_row.addWidget(self.font_size_combo)

        layout.addWidget(alphabet_label)
        layout.addWidget(self.alphabet_edit)
        layout.addLayout(counts_row)
        layout.addLayout(font_row)

        group.setLayout(layout)
        return group

    def _build_output_group(self) -> QGroupBox:
        group = QGroupBox("Passwords")
        layout = QVBoxLayout()
        layout.setContentsMargins(12, 12, 12, 12)
        layout.setSpacing(8)

        self.output_text = QPlainTextEdit()
        self.output_text.setReadOnly(True)
        self.output_text.setLineWrapMode(QPlainTextEdit.NoWrap)
        self.output_text.setPlaceholderText("Click Start to generate passwords...")

        buttons_row = QHBoxLayout()
        buttons_row.addStretch()

        self.start_button = QPushButton("Start")
        start_font = self.start_button.font()
        start_font.setBold(True)
        self.start_button.setFont(start_font)
        self.start_button.setCursor(Qt.PointingHandCursor)
        self.start_button.clicked.connect(self.on_start_clicked)

        self.cancel_button = QPushButton("Cancel")
        self.cancel_button.clicked.connect(self.on_cancel_clicked)

        self.save_button = QPushButton("Save Output...")
        self.save_button.clicked.connect(self.on_save_clicked)

        self.clear_button = QPushButton("Clear")
        self.clear_button.clicked.connect(self.output_text.clear)

        for button in (self.start_button, self.cancel_button, self.save_button, self.clear_button):
            buttons_row.addWidget(button)
        buttons_row.addStretch()

        layout.addWidget(self.output_text, 1)
        layout.addLayout(buttons_row)

        group.setLayout(layout)
        return group

    def _build_status_label(self) -> QLabel:
        self.status_label = QLabel(" ")
        self.status_label.setAlignment(Qt.AlignCenter)
        return self.status_label

    # -- helpers --

    def _apply_output_font(self) -> None:
        try:
            size = int(self.font_size_combo.currentText())
        except ValueError:
            return
        if size <= 0:
            return
        font = QFont(self.font_name_combo.currentText())
        font.setPointSize(size)
        self.output_text.setFont(font)

    def _set_running(self, running: bool) -> None:
        self.start_button.setEnabled(not running)
        self.cancel_button.setEnabled(running)
        self.alphabet_edit.setEnabled(not running)
        self.length_combo.setEnabled(not running)
        self.number_combo.setEnabled(not running)

    def _set_status(self, text: str) -> None:
        self._status_pending = text
        if not self._status_timer.isActive():
            self.status_label.setText(text or " ")

    def _put_output(self, text: str) -> None:
        self.output_text.appendPlainText(text)
        self.output_text.verticalScrollBar().setValue(
            self.output_text.verticalScrollBar().maximum()
        )

    def _read_request(self) -> GenerationRequest | None:
        alphabet = self.alphabet_edit.text()
        if not alphabet:
            # User deleted all the text: put the default back and carry on.
            self.alphabet_edit.setText(DEFAULT_ALPHABET)
            alphabet = DEFAULT_ALPHABET

        try:
            return validate(
                alphabet,
                self.length_combo.currentText(),
                self.number_combo.currentText(),
                self.config.delay_ms,
                seed=self.seed,
            )
        except ValidationError as exc:
            logger.error("Rejected input: %s", exc)
            if isinstance(exc, InvalidLength):
                self.length_combo.setCurrentText(str(DEFAULT_CONFIG.password_length))
            elif isinstance(exc, InvalidCount):
                self.number_combo.setCurrentText(str(DEFAULT_CONFIG.password_count))
            self._show_error(str(exc))
            return None

    @property
    def running(self) -> bool:
        return self._thread is not None

    # -- actions --

    def on_start_clicked(self) -> None:
        if self.running:
            return
        request = self._read_request()
        if request is None:
            return

        self.output_text.clear()
        self._set_running(True)
        self._status_pending = ""
        self.status_label.setText(" ")
        self._status_timer.start()

        thread = QThread(self)
        worker = GeneratorWorker(request, rng=self._rng)
        worker.moveToThread(thread)

        thread.started.connect(worker.run)
        worker.progress.connect(self._on_progress)
        worker.passwordGenerated.connect(self._on_password_generated)
        worker.finished.connect(self._on_finished)
        worker.failed.connect(self._on_failed)
        thread.finished.connect(worker.deleteLater)

        self._thread = thread
        self._worker = worker
        self._request = request
        thread.start()

    def on_cancel_clicked(self) -> None:
        if self._worker is not None:
            self._worker.cancel()
            self._set_status("Cancelling...")

    def on_save_clicked(self) -> None:
        text = self.output_text.toPlainText()
        if not text.strip():
            self._show_error("Nothing to save. Generate some passwords first.")
            return

        path, _filter = QFileDialog.getSaveFileName(
            self,
            "Save Output Text",
            "passwords.txt",
            "Text files (*.txt);;All files (*)",
        )
        if not path:
            return

        try:
            write_passwords(path, text.splitlines())
        except WriteFailure as exc:
            self._put_output(str(exc))
            self._set_status("Save failed.")
            return
        self._set_status(f"Saved to {path}")

    # -- worker signals --

    @Slot(int, int)
    def _on_progress(self, index: int, total: int) -> None:
        self._set_status(f"Generating password number {index} of {total}...")

    @Slot(int, str)
    def _on_password_generated(self, _index: int, password: str) -> None:
        self._put_output(password)

    @Slot(object)
    def _on_finished(self, result: GenerationResult) -> None:
        if result.cancelled:
            self._put_output("Cancelled by user.")
            self._run_over()
            return
        summary = ""
        if self._request is not None:
            bits = self._request.alphabet.entropy_bits(self._request.length)
            summary = (
                f"Generated {len(result.passwords)} passwords, "
                f"about {bits:.1f} bits each."
            )
        self._run_over(summary)

    @Slot(str)
    def _on_failed(self, message: str) -> None:
        self._run_over()
        self._show_error(f"Error while generating passwords:\n{message}")

    def _run_over(self, message: str = "") -> None:
        if self._thread is not None:
            # run() has returned by the time its signal arrives here.
            self._thread.quit()
            self._thread.wait()
            self._thread.deleteLater()
        self._thread = None
        self._worker = None
        self._request = None
        self._status_timer.stop()
        self._set_status(message)
        self._set_running(False)

    @Slot()
    def _on_status_tick(self) -> None:
        self.status_label.setText(self._status_pending or " ")

    def shutdown(self) -> None:
        """Stop any active run and wait for its thread."""
        if self._worker is not None:
            self._worker.cancel()
        if self._thread is not None:
            self._thread.quit()
            self._thread.wait()

    def _show_error(self, message: str) -> None:
        self.status_label.setText(message)
        msg = QMessageBox(self)
        msg.setWindowTitle("Error")
        msg.setIcon(QMessageBox.Critical)
        msg.setText(message)
        msg.exec()


# ---------- About Tab ----------


class AboutTab(QWidget):
    """
    About tab: overview and a few notes on randomness.
    """

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(16, 16, 16, 16)
        layout.setSpacing(10)

        title = QLabel(f"About – {PROGRAM_TITLE}")
        title_font = title.font()
        title_font.setPointSize(title_font.pointSize() + 2)
        title_font.setBold(True)
        title.setFont(title_font)
        layout.addWidget(title)

        intro = QLabel(
            "Generates random passwords from an alphabet of available characters. "
            "The default alphabet uses letters and digits that most people can "
            "tell apart when written down on paper."
        )
        intro.setWordWrap(True)
        layout.addWidget(intro)

        usage_label = QLabel("<b>How to use</b>")
        layout.addWidget(usage_label)

        usage_text = QLabel(
            "• Type the characters you want into the alphabet field. "
            "Characters may repeat; repeated ones are picked more often.\n"
            "• Choose how many passwords and how many characters each.\n"
            "• Click Start. Cancel stops after the current password.\n"
            "• Save Output writes everything in the output area to a text file."
        )
        usage_text.setWordWrap(True)
        layout.addWidget(usage_text)

        random_label = QLabel("<b>About duplicates</b>")
        layout.addWidget(random_label)

        random_text = QLabel(
            "Our minds look for patterns in random data. Duplicates make us think "
            "data can not be random, but the opposite is true: with passwords of "
            "10 characters from an alphabet of 30, about one in four will have the "
            "same character twice in a row. Simply ignore passwords you don't like."
        )
        random_text.setWordWrap(True)
        layout.addWidget(random_text)

        note_label = QLabel("<b>Note</b>")
        layout.addWidget(note_label)

        note_text = QLabel(
            "Passwords come from a general-purpose random number generator. "
            "They are fine as memorable or throw-away passwords, but are not "
            "meant as cryptographic keys or security tokens."
        )
        note_text.setWordWrap(True)
        layout.addWidget(note_text)

        chars_label = QLabel("<b>Special characters</b>")
        layout.addWidget(chars_label)

        self.chars_text = QLabel(
            "Each character in the alphabet is one Unicode code point, plus any "
            "accent marks written after it. Emoji built from several code points "
            "(variation selectors, skin-tone modifiers, zero-width joiner "
            "sequences, flags) are split into their parts, "
            "and the parts are drawn separately. Use single-code-point emoji only."
        )
        self.chars_text.setWordWrap(True)
        layout.addWidget(self.chars_text)

        layout.addStretch(1)


# ---------- Main window ----------


class RandomPassWindow(QMainWindow):
    def __init__(self, config: RandomPassConfig | None = None, seed: int | None = None) -> None:
        super().__init__()
        self.config = config or DEFAULT_CONFIG

        self.setWindowTitle(PROGRAM_TITLE)
        self.setMinimumSize(200, 200)

        self._apply_base_style()

        self.tabs = QTabWidget()
        self.generator_tab = GeneratorTab(self.config, seed=seed)
        self.about_tab = AboutTab()

        self.tabs.addTab(self.generator_tab, "Generator")
        self.tabs.addTab(self.about_tab, "About")

        self.setCentralWidget(self.tabs)
        self._apply_geometry()

    def _apply_geometry(self) -> None:
        left, top, width, height = self.config.window
        if width > 0 and height > 0:
            self.setGeometry(left, top, width, height)
        else:
            self.resize(640, 560)
            self.move(left, top)

    def _apply_base_style(self) -> None:
        self.setStyleSheet(
            """
            QMainWindow {
                background-color: #05070c;
            }
            QWidget {
                color: #e5e7eb;
                background-color: #05070c;
                font-family: Segoe UI, Arial, sans-serif;
            }
            QGroupBox {
                border: 1px solid #1f2933;
                border-radius: 10px;
                margin-top: 16px;
                background-color: #080b12;
            }
            QGroupBox::title {
                subcontrol-origin: margin;
                subcontrol-position: top left;
                padding: 2px 8px;
                color: #7dd3fc;
                font-weight: 600;
                font-size: 10pt;
            }
            QLabel {
                font-size: 10pt;
            }
            QLineEdit, QComboBox {
                border: 1px solid #1f2933;
                border-radius: 6px;
                padding: 6px 8px;
                background-color: #050810;
                selection-background-color: #38bdf8;
                selection-color: #f9fafb;
            }
            QPlainTextEdit {
                border: 1px solid #1f2933;
                border-radius: 6px;
                background-color: #050810;
            }
            QPushButton {
                border-radius: 8px;
                padding: 6px 14px;
                background-color: #0b1120;
                color: #e5e7eb;
                border: 1px solid #38bdf8;
            }
            QPushButton:hover {
                background-color: #020617;
            }
            QPushButton:pressed {
                background-color: #000000;
            }
            QPushButton:disabled {
                color: #4b5563;
                border: 1px solid #1f2933;
            }
            """
        )

    def closeEvent(self, event: QCloseEvent) -> None:
        self.generator_tab.shutdown()
        super().closeEvent(event)


def main(config: RandomPassConfig | None = None, seed: int | None = None) -> int:
    app = QApplication.instance() or QApplication(sys.argv)
    window = RandomPassWindow(config, seed=seed)
    if window.config.maximize:
        window.showMaximized()
    else:
        window.show()
    return app.exec()
