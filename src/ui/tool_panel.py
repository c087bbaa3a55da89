"""Right-hand tool panel: Captions / Style / Edit / Analyze tabs."""

from __future__ import annotations

from PySide6.QtCore import Qt, Signal
from PySide6.QtGui import QColor
from PySide6.QtWidgets import (
    QColorDialog,
    QFormLayout,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QListWidget,
    QListWidgetItem,
    QPlainTextEdit,
    QPushButton,
    QSlider,
    QTabWidget,
    QVBoxLayout,
    QWidget,
)

from src.models.session import EditorSession, EditorTab
from src.utils.config import FONT_SIZE_MAX, FONT_SIZE_MIN, STROKE_WIDTH_MAX, STROKE_WIDTH_MIN
from src.utils.i18n import tr

_TAB_ORDER = [EditorTab.CAPTION, EditorTab.STYLE, EditorTab.EDIT, EditorTab.ANALYZE]


def _swatch_style(color: str) -> str:
    return f"background-color: {color}; border: 1px solid #ccc;"


class ToolPanel(QTabWidget):
    """Tabbed editing tools. Emits intent signals; never mutates the session."""

    magic_caption_requested = Signal()
    caption_chosen = Signal(str)        # suggestion or custom text
    style_edited = Signal(dict)         # {field: value} for the selected caption
    delete_selected_requested = Signal()
    edit_prompt_changed = Signal(str)
    edit_requested = Signal()
    analyze_requested = Signal()
    analysis_dismissed = Signal()
    tab_selected = Signal(object)       # EditorTab

    def __init__(self, parent=None):
        super().__init__(parent)
        self._refreshing = False
        self._edit_btn_allowed = False

        self.addTab(self._build_caption_tab(), tr("Captions"))
        self.addTab(self._build_style_tab(), tr("Style"))
        self.addTab(self._build_edit_tab(), tr("Edit"))
        self.addTab(self._build_analyze_tab(), tr("Analyze"))
        self.currentChanged.connect(self._on_current_changed)

    # ------------------------------------------------------------ Captions

    def _build_caption_tab(self) -> QWidget:
        tab = QWidget()
        layout = QVBoxLayout(tab)

        self._magic_btn = QPushButton(tr("Magic Captions"))
        self._magic_btn.clicked.connect(self.magic_caption_requested)
        layout.addWidget(self._magic_btn)

        layout.addWidget(QLabel(tr("Suggestions")))
        self._suggestion_list = QListWidget()
        self._suggestion_list.itemClicked.connect(self._on_suggestion_clicked)
        layout.addWidget(self._suggestion_list, 1)

        custom_row = QHBoxLayout()
        self._custom_edit = QLineEdit()
        self._custom_edit.setPlaceholderText(tr("Type your own..."))
        self._custom_edit.returnPressed.connect(self._submit_custom)
        self._add_btn = QPushButton(tr("Add"))
        self._add_btn.clicked.connect(self._submit_custom)
        custom_row.addWidget(self._custom_edit, 1)
        custom_row.addWidget(self._add_btn)
        layout.addLayout(custom_row)
        return tab

    def _on_suggestion_clicked(self, item: QListWidgetItem) -> None:
        self.caption_chosen.emit(item.text())

    def _submit_custom(self) -> None:
        text = self._custom_edit.text().strip()
        if not text:
            return
        self._custom_edit.clear()
        self.caption_chosen.emit(text)

    # --------------------------------------------------------------- Style

    def _build_style_tab(self) -> QWidget:
        tab = QWidget()
        layout = QVBoxLayout(tab)

        self._no_selection_label = QLabel(tr("Select a caption on the image to edit its style."))
        self._no_selection_label.setWordWrap(True)
        layout.addWidget(self._no_selection_label)

        self._style_form = QWidget()
        form = QFormLayout(self._style_form)

        self._text_edit = QLineEdit()
        self._text_edit.textChanged.connect(self._on_text_changed)
        form.addRow(tr("Text:"), self._text_edit)

        size_row = QHBoxLayout()
        self._font_size_slider = QSlider(Qt.Orientation.Horizontal)
        self._font_size_slider.setRange(FONT_SIZE_MIN, FONT_SIZE_MAX)
        self._font_size_slider.valueChanged.connect(self._on_font_size_changed)
        self._font_size_label = QLabel()
        self._font_size_label.setMinimumWidth(44)
        size_row.addWidget(self._font_size_slider, 1)
        size_row.addWidget(self._font_size_label)
        form.addRow(tr("Font Size:"), size_row)

        self._color_swatch, self._color_btn, color_row = self._color_row()
        self._color_btn.clicked.connect(lambda: self._choose_color("color", self._color_swatch))
        form.addRow(tr("Text Color:"), color_row)

        self._stroke_swatch, self._stroke_btn, stroke_row = self._color_row()
        self._stroke_btn.clicked.connect(lambda: self._choose_color("stroke_color", self._stroke_swatch))
        form.addRow(tr("Outline Color:"), stroke_row)

        stroke_w_row = QHBoxLayout()
        self._stroke_slider = QSlider(Qt.Orientation.Horizontal)
        # 0.5px 단위: 슬라이더 값 = 선폭 x 2
        self._stroke_slider.setRange(STROKE_WIDTH_MIN * 2, STROKE_WIDTH_MAX * 2)
        self._stroke_slider.valueChanged.connect(self._on_stroke_width_changed)
        self._stroke_label = QLabel()
        self._stroke_label.setMinimumWidth(44)
        stroke_w_row.addWidget(self._stroke_slider, 1)
        stroke_w_row.addWidget(self._stroke_label)
        form.addRow(tr("Outline Width:"), stroke_w_row)

        self._delete_btn = QPushButton(tr("Delete Caption"))
        self._delete_btn.clicked.connect(self.delete_selected_requested)
        form.addRow(self._delete_btn)

        layout.addWidget(self._style_form)
        layout.addStretch()
        return tab

    @staticmethod
    def _color_row() -> tuple[QLabel, QPushButton, QHBoxLayout]:
        row = QHBoxLayout()
        swatch = QLabel()
        swatch.setFixedSize(40, 20)
        btn = QPushButton(tr("Choose..."))
        row.addWidget(swatch)
        row.addWidget(btn)
        row.addStretch()
        return swatch, btn, row

    def _choose_color(self, field_name: str, swatch: QLabel) -> None:
        current = QColor(swatch.property("color") or "#ffffff")
        color = QColorDialog.getColor(current, self, tr("Choose Color"))
        if not color.isValid():
            return
        name = color.name()
        swatch.setProperty("color", name)
        swatch.setStyleSheet(_swatch_style(name))
        self.style_edited.emit({field_name: name})

    def _on_text_changed(self, text: str) -> None:
        if not self._refreshing:
            self.style_edited.emit({"text": text})

    def _on_font_size_changed(self, value: int) -> None:
        self._font_size_label.setText(f"{value}px")
        if not self._refreshing:
            self.style_edited.emit({"font_size": float(value)})

    def _on_stroke_width_changed(self, value: int) -> None:
        width = value / 2
        self._stroke_label.setText(f"{width:g}px")
        if not self._refreshing:
            self.style_edited.emit({"stroke_width": width})

    # ---------------------------------------------------------------- Edit

    def _build_edit_tab(self) -> QWidget:
        tab = QWidget()
        layout = QVBoxLayout(tab)
        layout.addWidget(QLabel(tr("Describe how the image should change:")))
        self._prompt_edit = QPlainTextEdit()
        self._prompt_edit.setPlaceholderText(tr("e.g. Add a retro filter, make it snow..."))
        self._prompt_edit.textChanged.connect(self._on_prompt_changed)
        layout.addWidget(self._prompt_edit, 1)
        self._edit_btn = QPushButton(tr("Generate Edit"))
        self._edit_btn.clicked.connect(self.edit_requested)
        layout.addWidget(self._edit_btn)
        return tab

    def _on_prompt_changed(self) -> None:
        text = self._prompt_edit.toPlainText()
        self._edit_btn.setEnabled(self._edit_btn_allowed and bool(text.strip()))
        if not self._refreshing:
            self.edit_prompt_changed.emit(text)

    # ------------------------------------------------------------- Analyze

    def _build_analyze_tab(self) -> QWidget:
        tab = QWidget()
        layout = QVBoxLayout(tab)
        self._analyze_btn = QPushButton(tr("Analyze Image"))
        self._analyze_btn.clicked.connect(self.analyze_requested)
        layout.addWidget(self._analyze_btn)

        self._analysis_widget = QWidget()
        a_layout = QFormLayout(self._analysis_widget)
        self._description_label = QLabel()
        self._description_label.setWordWrap(True)
        self._mood_label = QLabel()
        self._keywords_label = QLabel()
        self._keywords_label.setWordWrap(True)
        a_layout.addRow(tr("Description:"), self._description_label)
        a_layout.addRow(tr("Mood:"), self._mood_label)
        a_layout.addRow(tr("Keywords:"), self._keywords_label)
        self._dismiss_btn = QPushButton(tr("Clear Analysis"))
        self._dismiss_btn.clicked.connect(self.analysis_dismissed)
        a_layout.addRow(self._dismiss_btn)
        layout.addWidget(self._analysis_widget)
        layout.addStretch()
        return tab

    # ------------------------------------------------------------- refresh

    def _on_current_changed(self, index: int) -> None:
        if not self._refreshing and 0 <= index < len(_TAB_ORDER):
            self.tab_selected.emit(_TAB_ORDER[index])

    def refresh(self, session: EditorSession) -> None:
        """Sync every widget with *session* without re-emitting edit signals."""
        self._refreshing = True
        try:
            has_image = session.has_image
            busy = session.is_busy

            # Captions
            self._magic_btn.setEnabled(has_image and not busy)
            self._add_btn.setEnabled(has_image)
            self._custom_edit.setEnabled(has_image)
            self._suggestion_list.clear()
            for text in session.suggestions:
                self._suggestion_list.addItem(text)

            # Style
            selected = session.selected_caption()
            self._no_selection_label.setVisible(selected is None)
            self._style_form.setVisible(selected is not None)
            if selected is not None:
                self._font_size_slider.setValue(round(selected.font_size))
                self._font_size_label.setText(f"{round(selected.font_size)}px")
                if self._text_edit.text() != selected.text:
                    self._text_edit.setText(selected.text)
                self._stroke_slider.setValue(round(selected.stroke_width * 2))
                self._stroke_label.setText(f"{round(selected.stroke_width * 2) / 2:g}px")
                for swatch, color in ((self._color_swatch, selected.color),
                                      (self._stroke_swatch, selected.stroke_color)):
                    swatch.setProperty("color", color)
                    swatch.setStyleSheet(_swatch_style(color))

            # Edit
            if self._prompt_edit.toPlainText() != session.edit_prompt:
                self._prompt_edit.setPlainText(session.edit_prompt)
            self._edit_btn_allowed = has_image and not busy
            self._edit_btn.setEnabled(self._edit_btn_allowed and bool(session.edit_prompt.strip()))

            # Analyze
            self._analyze_btn.setEnabled(has_image and not busy)
            analysis = session.analysis
            self._analysis_widget.setVisible(analysis is not None)
            if analysis is not None:
                self._description_label.setText(analysis.description)
                self._mood_label.setText(analysis.mood)
                self._keywords_label.setText(", ".join(f"#{k}" for k in analysis.keywords))

            self.setCurrentIndex(_TAB_ORDER.index(session.active_tab))
        finally:
            self._refreshing = False
