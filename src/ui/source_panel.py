"""Left-hand source panel: image upload and trending templates."""

from __future__ import annotations

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import (
    QLabel,
    QListWidget,
    QListWidgetItem,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from src.models.meme_template import MemeTemplate
from src.utils.i18n import tr


class SourcePanel(QWidget):
    """Upload button plus the template catalog."""

    upload_requested = Signal()
    template_selected = Signal(object)  # MemeTemplate

    def __init__(self, templates: list[MemeTemplate], parent=None):
        super().__init__(parent)
        self._templates = list(templates)

        layout = QVBoxLayout(self)

        source_label = QLabel(tr("Source"))
        source_label.setStyleSheet("font-weight: bold;")
        layout.addWidget(source_label)

        self._upload_btn = QPushButton(tr("Upload Image"))
        self._upload_btn.clicked.connect(self.upload_requested)
        layout.addWidget(self._upload_btn)

        templates_label = QLabel(tr("Trending Templates"))
        templates_label.setStyleSheet("font-weight: bold;")
        layout.addWidget(templates_label)

        self._template_list = QListWidget()
        for template in self._templates:
            item = QListWidgetItem(template.name)
            item.setData(Qt.ItemDataRole.UserRole, template.template_id)
            item.setToolTip(template.url)
            self._template_list.addItem(item)
        self._template_list.itemClicked.connect(self._on_template_clicked)
        layout.addWidget(self._template_list, 1)

    def _on_template_clicked(self, item: QListWidgetItem) -> None:
        template_id = item.data(Qt.ItemDataRole.UserRole)
        for template in self._templates:
            if template.template_id == template_id:
                self.template_selected.emit(template)
                return

    def set_loading(self, loading: bool) -> None:
        """Disable inputs while a template download is running."""
        self._upload_btn.setEnabled(not loading)
        self._template_list.setEnabled(not loading)
