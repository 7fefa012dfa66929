from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple
import logging

from PyQt5.QtCore import Qt, QTimer, pyqtSignal
from PyQt5.QtGui import QColor, QCursor, QPainter, QPixmap
from PyQt5.QtWidgets import (
    QFileDialog,
    QGridLayout,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QListWidget,
    QMainWindow,
    QMessageBox,
    QPushButton,
    QSizePolicy,
    QVBoxLayout,
    QWidget,
)

from CB_Libs.CatalogLib.drawing_generator import DrawingGenerator, GeneratedDrawing
from CB_Libs.CatalogLib.drawings_catalog import CategoryEntry, DrawingRef, list_categories
from CB_Libs.CatalogLib.image_source import ImageLoadError, ImageSource
from CB_Libs.config import ColoringBookConfig
from CB_Libs.constants import (
    CURSOR_SWATCH_SIZE,
    DEFAULT_WINDOW_HEIGHT,
    DEFAULT_WINDOW_WIDTH,
    PALETTE_COLUMNS,
    PALETTE_SWATCH_SIZE,
    RESIZE_DEBOUNCE_MS,
)
from CB_Libs.PaintLib.background_tasks import BackgroundTasks
from CB_Libs.PaintLib.canvas_session import CanvasSession
from CB_Libs.PaintLib.color_palette import COLOR_PALETTE
from CB_Libs.PaintLib.export_sink import ExportedImage

logger = logging.getLogger(__name__)

GENERATED_CATEGORY = "custom"
TASK_LOAD = "load"
TASK_GENERATE = "generate"


class CanvasLabel(QLabel):
    """Displays the live buffer and reports element-relative pointer positions."""

    clicked = pyqtSignal(float, float)
    hovered = pyqtSignal(float, float)

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.setMouseTracking(True)
        self.setAlignment(Qt.AlignCenter)

    def mousePressEvent(self, event: Any) -> None:
        if event.button() == Qt.LeftButton:
            self.clicked.emit(float(event.x()), float(event.y()))
        super().mousePressEvent(event)

    def mouseMoveEvent(self, event: Any) -> None:
        self.hovered.emit(float(event.x()), float(event.y()))
        super().mouseMoveEvent(event)


class CanvasContainer(QWidget):
    """Holds the canvas centered and announces size changes."""

    resized = pyqtSignal()

    def resizeEvent(self, event: Any) -> None:
        super().resizeEvent(event)
        self.resized.emit()


class DialogExportSink:
    """Offers a save-as dialog and writes the exported bytes."""

    def __init__(self, parent: QWidget, directory: Path) -> None:
        self.parent = parent
        self.directory = directory

    def save(self, exported: ExportedImage) -> Optional[Path]:
        extension = Path(exported.filename).suffix.lstrip(".").lower()
        save_path, _ = QFileDialog.getSaveFileName(
            self.parent,
            "Save Drawing",
            str(self.directory / exported.filename),
            f"{extension.upper()} Images (*.{extension})",
        )
        if not save_path:
            return None

        path = Path(save_path)
        path.write_bytes(exported.data)
        logger.info(f"Saved {exported.filename} to {path}")
        return path


class ColoringBookWindow(QMainWindow):
    def __init__(self, config: Optional[ColoringBookConfig] = None) -> None:
        super().__init__()
        self.config = config or ColoringBookConfig()
        self.setWindowTitle("Coloring Book")
        self.resize(DEFAULT_WINDOW_WIDTH, DEFAULT_WINDOW_HEIGHT)

        self.image_source = ImageSource(self.config)
        self.catalog: Dict[str, CategoryEntry] = {}
        self.current_drawings: List[DrawingRef] = []
        self.session: Optional[CanvasSession] = None
        self.pending_drawing: Optional[DrawingRef] = None
        self.generator = DrawingGenerator(self.config)
        self.tasks = BackgroundTasks(self)

        self.resize_timer = QTimer(self)
        self.resize_timer.setSingleShot(True)
        self.resize_timer.setInterval(RESIZE_DEBOUNCE_MS)

        self._build_ui()
        self._connect_signals()
        self.load_catalog()

    def _build_ui(self) -> None:
        central = QWidget(self)
        self.setCentralWidget(central)

        root = QHBoxLayout(central)

        browse_col = QVBoxLayout()
        palette_col = QVBoxLayout()

        self.categories_list = QListWidget()
        self.drawings_list = QListWidget()
        self.theme_input = QLineEdit()
        self.theme_input.setPlaceholderText("Describe a drawing, e.g. a dragon reading a book")
        self.btn_generate = QPushButton("Generate Drawing")
        self.label_status = QLabel("")
        self.label_status.setWordWrap(True)

        browse_col.addWidget(QLabel("Categories"))
        browse_col.addWidget(self.categories_list)
        browse_col.addWidget(QLabel("Drawings"))
        browse_col.addWidget(self.drawings_list)
        browse_col.addWidget(QLabel("Create Your Own"))
        browse_col.addWidget(self.theme_input)
        browse_col.addWidget(self.btn_generate)
        browse_col.addWidget(self.label_status)

        self.canvas_container = CanvasContainer()
        self.canvas_container.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Expanding)
        container_layout = QVBoxLayout(self.canvas_container)
        container_layout.setAlignment(Qt.AlignCenter)
        self.canvas_label = CanvasLabel()
        self.canvas_label.setText("Pick a drawing to start coloring")
        container_layout.addWidget(self.canvas_label, alignment=Qt.AlignCenter)

        self.palette_buttons: List[QPushButton] = []
        palette_grid = QGridLayout()
        for index, (hex_color, name) in enumerate(COLOR_PALETTE):
            button = QPushButton()
            button.setToolTip(name)
            button.setFixedSize(PALETTE_SWATCH_SIZE, PALETTE_SWATCH_SIZE)
            button.setCheckable(True)
            button.setStyleSheet(self._swatch_style(hex_color, selected=False))
            palette_grid.addWidget(button, index // PALETTE_COLUMNS, index % PALETTE_COLUMNS)
            self.palette_buttons.append(button)

        self.btn_download = QPushButton("Download")
        self.btn_download_blank = QPushButton("Download Blank")
        self.btn_reset = QPushButton("Start Over")

        palette_col.addWidget(QLabel("Colors"))
        palette_col.addLayout(palette_grid)
        palette_col.addStretch(1)
        palette_col.addWidget(self.btn_reset)
        palette_col.addWidget(self.btn_download)
        palette_col.addWidget(self.btn_download_blank)

        root.addLayout(browse_col, stretch=1)
        root.addWidget(self.canvas_container, stretch=4)
        root.addLayout(palette_col, stretch=0)

        self._mark_selected_swatch(0)
        self._set_canvas_actions_enabled(False)

    def _connect_signals(self) -> None:
        self.categories_list.currentRowChanged.connect(self.on_category_selected)
        self.drawings_list.currentRowChanged.connect(self.on_drawing_selected)
        self.btn_generate.clicked.connect(self.generate_drawing)
        self.theme_input.returnPressed.connect(self.generate_drawing)
        self.canvas_label.clicked.connect(self.on_canvas_click)
        self.canvas_label.hovered.connect(self.on_canvas_hover)
        self.canvas_container.resized.connect(self.resize_timer.start)
        self.resize_timer.timeout.connect(self.refit_canvas)
        self.tasks.succeeded.connect(self._on_task_succeeded)
        self.tasks.failed.connect(self._on_task_failed)
        self.btn_download.clicked.connect(self.download_colored)
        self.btn_download_blank.clicked.connect(self.download_blank)
        self.btn_reset.clicked.connect(self.reset_drawing)
        for index, button in enumerate(self.palette_buttons):
            button.clicked.connect(lambda _checked, i=index: self.select_color(i))

    # Catalog

    def load_catalog(self) -> None:
        self.catalog = list_categories(self.config.drawings_path)
        self.categories_list.clear()
        for entry in self.catalog.values():
            self.categories_list.addItem(entry.display_name)

        if self.catalog:
            self.categories_list.setCurrentRow(0)

    def on_category_selected(self, index: int) -> None:
        self.drawings_list.clear()
        entries = list(self.catalog.values())
        if index < 0 or index >= len(entries):
            self.current_drawings = []
            return

        self.current_drawings = list(entries[index].drawings)
        for drawing in self.current_drawings:
            self.drawings_list.addItem(drawing.display_name)

    def on_drawing_selected(self, index: int) -> None:
        if index < 0 or index >= len(self.current_drawings):
            return
        self.load_drawing(self.current_drawings[index])

    # Session lifecycle

    def load_drawing(self, drawing: DrawingRef) -> None:
        """Fetch a drawing in the background; the session is built when the bytes arrive."""
        self.session = None
        self.pending_drawing = drawing
        self._set_canvas_actions_enabled(False)
        self._show_canvas_message("Loading drawing...")
        self.tasks.submit((TASK_LOAD, drawing), self.image_source.fetch_bytes, drawing.url)

    def _on_drawing_fetched(self, drawing: DrawingRef, data: bytes) -> None:
        if drawing is not self.pending_drawing:
            logger.debug(f"Discarding stale load of {drawing.filename}")
            return

        try:
            session = CanvasSession.from_bytes(
                data,
                drawing.url,
                drawing=drawing,
                fill_tolerance=self.config.fill_tolerance,
            )
        except ImageLoadError as e:
            self._on_drawing_failed(drawing, e)
            return

        self.pending_drawing = None
        self.session = session
        self.setWindowTitle(f"Coloring Book - {drawing.display_name}")
        self._mark_selected_swatch(session.palette.selected_index)
        self._update_cursor()
        self._set_canvas_actions_enabled(True)
        self.refit_canvas()

    def _on_drawing_failed(self, drawing: DrawingRef, error: Exception) -> None:
        if drawing is not self.pending_drawing:
            logger.debug(f"Ignoring failed stale load of {drawing.filename}")
            return
        self.pending_drawing = None
        logger.error(f"Error loading drawing {drawing.filename}: {error}")
        self._show_canvas_message("Error loading image. Please check if the file exists.")

    def _on_task_succeeded(self, tag: Tuple[str, Any], result: Any) -> None:
        kind, subject = tag
        if kind == TASK_LOAD:
            self._on_drawing_fetched(subject, result)
        elif kind == TASK_GENERATE:
            self._on_drawing_generated(result)

    def _on_task_failed(self, tag: Tuple[str, Any], error: Exception) -> None:
        kind, subject = tag
        if kind == TASK_LOAD:
            self._on_drawing_failed(subject, error)
        elif kind == TASK_GENERATE:
            logger.error(f"Error generating drawing: {error}")
            self.label_status.setText(f"Error: {error}")
            self.btn_generate.setEnabled(True)

    def refit_canvas(self) -> None:
        if self.session is None:
            return

        width, height = self.session.fit_to_container(
            self.canvas_container.width(), self.canvas_container.height()
        )
        display_width, display_height = max(1, round(width)), max(1, round(height))
        self.canvas_label.setFixedSize(display_width, display_height)
        self.session.set_display_size(display_width, display_height)
        self.refresh_canvas()

    def refresh_canvas(self) -> None:
        if self.session is None:
            return

        pixmap = QPixmap()
        if not pixmap.loadFromData(self._to_png_bytes(self.session.render()), "PNG"):
            self.canvas_label.setText("Preview failed")
            return

        scaled = pixmap.scaled(
            self.canvas_label.size(),
            Qt.AspectRatioMode.IgnoreAspectRatio,
            Qt.TransformationMode.SmoothTransformation,
        )
        self.canvas_label.setPixmap(scaled)

    def reset_drawing(self) -> None:
        if self.session is None:
            return
        self.session.reset()
        self.refresh_canvas()

    # Pointer input and palette

    def on_canvas_click(self, x: float, y: float) -> None:
        if self.session is None:
            return

        result = self.session.click(x, y)
        if result.changed:
            self.refresh_canvas()

    def on_canvas_hover(self, x: float, y: float) -> None:
        if self.session is None:
            return

        position = self.session.hover(x, y)
        if position is not None:
            self.statusBar().showMessage(f"{position[0]}, {position[1]}")

    def select_color(self, index: int) -> None:
        if self.session is not None:
            self.session.select_color(index)
        self._mark_selected_swatch(index)
        self._update_cursor()

    def _mark_selected_swatch(self, selected_index: int) -> None:
        for index, button in enumerate(self.palette_buttons):
            hex_color = COLOR_PALETTE[index][0]
            selected = index == selected_index
            button.setChecked(selected)
            button.setStyleSheet(self._swatch_style(hex_color, selected))

    def _swatch_style(self, hex_color: str, selected: bool) -> str:
        if selected:
            border = "3px solid #333"
        elif hex_color == "#FFFFFF":
            border = "2px solid #ccc"
        else:
            border = "none"
        return f"background-color: {hex_color}; border: {border}; border-radius: 4px;"

    def _update_cursor(self) -> None:
        if self.session is None:
            self.canvas_label.unsetCursor()
            return

        size = CURSOR_SWATCH_SIZE
        pixmap = QPixmap(size, size)
        pixmap.fill(Qt.transparent)
        painter = QPainter(pixmap)
        painter.setRenderHint(QPainter.Antialiasing)
        painter.setBrush(QColor(self.session.palette.selected_hex))
        painter.setPen(QColor("#333333"))
        painter.drawEllipse(1, 1, size - 2, size - 2)
        painter.end()
        self.canvas_label.setCursor(QCursor(pixmap, size // 2, size // 2))

    # Export

    def download_colored(self) -> None:
        if self.session is None:
            return

        sink = DialogExportSink(self, self.config.download_path)
        exported = self.session.export_colored()
        if exported is None:
            self._show_warning("Download Failed", "The colored drawing could not be encoded.")
            return
        self.session.deliver(exported, sink)

    def download_blank(self) -> None:
        if self.session is None:
            return

        exported = self.session.export_original(self.image_source)
        if exported is None:
            self._show_warning(
                "Download Failed",
                "Error downloading original image. Please try again.",
            )
            return

        sink = DialogExportSink(self, self.config.download_path)
        self.session.deliver(exported, sink)

    # Generation

    def generate_drawing(self) -> None:
        theme = self.theme_input.text().strip()
        if not theme:
            self.label_status.setText("Please enter a theme for the drawing.")
            return

        self.label_status.setText("Generating drawing...")
        self.btn_generate.setEnabled(False)
        self.tasks.submit((TASK_GENERATE, theme), self.generator.generate, theme)

    def _on_drawing_generated(self, generated: GeneratedDrawing) -> None:
        self.btn_generate.setEnabled(True)
        if not generated.url:
            self.label_status.setText(f"Drawing {generated.filename} created.")
            return

        self.label_status.setText("Drawing created successfully!")
        self.theme_input.clear()
        self.load_drawing(DrawingRef(GENERATED_CATEGORY, generated.filename, generated.url))

    # Helpers

    def _show_canvas_message(self, message: str) -> None:
        self.canvas_label.clear()
        self.canvas_label.setMinimumSize(0, 0)
        self.canvas_label.setMaximumSize(16777215, 16777215)
        self.canvas_label.unsetCursor()
        self.canvas_label.setText(message)

    def _set_canvas_actions_enabled(self, enabled: bool) -> None:
        self.btn_download.setEnabled(enabled)
        self.btn_download_blank.setEnabled(enabled)
        self.btn_reset.setEnabled(enabled)

    def _to_png_bytes(self, image: Any) -> bytes:
        from io import BytesIO

        buffer = BytesIO()
        image.save(buffer, format="PNG")
        return buffer.getvalue()

    def _show_warning(self, title: str, message: str) -> None:
        QMessageBox.warning(self, title, message)

    def closeEvent(self, event: Any) -> None:
        self.tasks.shutdown()
        super().closeEvent(event)
