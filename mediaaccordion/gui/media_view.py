# mediaaccordion/gui/media_view.py
import os
import logging
from PySide6.QtWidgets import QLabel, QWidget, QVBoxLayout, QSizePolicy
from PySide6.QtGui import QPixmap
from PySide6.QtCore import Qt, QUrl
from PySide6.QtMultimedia import QMediaPlayer, QAudioOutput
from PySide6.QtMultimediaWidgets import QVideoWidget

from ..utils.paths import resolve_media_path

logger = logging.getLogger(__name__)

MEDIA_OBJECT_NAME = "mediaElement"


class ImageMediaView(QLabel):
    """Shows an item's image scaled to the media area; falls back to the title."""
    is_video = False

    def __init__(self, item, parent=None):
        super().__init__(parent)
        self.setObjectName(MEDIA_OBJECT_NAME)
        self.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.setSizePolicy(QSizePolicy.Policy.Ignored, QSizePolicy.Policy.Ignored)
        self._pixmap = QPixmap()

        path = resolve_media_path(item.media_url)
        if path and os.path.exists(path):
            self._pixmap = QPixmap(path)
        if self._pixmap.isNull():
            if item.media_url:
                logger.warning(f"Could not load image '{item.media_url}' for item '{item.title}'.")
            self.setText(item.title)
        else:
            self._rescale()

    def resizeEvent(self, event):
        super().resizeEvent(event)
        self._rescale()

    def _rescale(self):
        if self._pixmap.isNull() or self.width() <= 0 or self.height() <= 0:
            return
        self.setPixmap(self._pixmap.scaled(self.size(), Qt.AspectRatioMode.KeepAspectRatio,
                                           Qt.TransformationMode.SmoothTransformation))

    def play(self):
        pass

    def pause(self):
        pass

    def stop(self):
        pass


class VideoMediaView(QWidget):
    """A muted, looping video that plays and pauses with the accordion."""
    is_video = True

    def __init__(self, item, autoplay=True, parent=None):
        super().__init__(parent)
        self.setObjectName(MEDIA_OBJECT_NAME)
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        self.video_widget = QVideoWidget(self)
        layout.addWidget(self.video_widget)

        self.media_player = QMediaPlayer(self)
        self.audio_output = QAudioOutput(self)
        self.audio_output.setMuted(True)
        self.media_player.setAudioOutput(self.audio_output)
        self.media_player.setVideoOutput(self.video_widget)
        self.media_player.setLoops(QMediaPlayer.Loops.Infinite)
        self.media_player.errorOccurred.connect(self._on_error)

        path = resolve_media_path(item.media_url)
        if path:
            self.media_player.setSource(QUrl.fromLocalFile(path))
            if autoplay:
                self.media_player.play()
        else:
            logger.warning(f"Video '{item.media_url}' for item '{item.title}' is not a local file.")

    def _on_error(self, error, error_string=""):
        logger.warning(f"Video playback error {error}: {error_string}")

    def play(self):
        if self.media_player.playbackState() != QMediaPlayer.PlaybackState.PlayingState:
            self.media_player.play()

    def pause(self):
        if self.media_player.playbackState() == QMediaPlayer.PlaybackState.PlayingState:
            self.media_player.pause()

    def stop(self):
        self.media_player.stop()


def create_media_view(item, autoplay=True, parent=None):
    """
    Builds the widget rendering an item's media payload.

    Returns:
        QWidget | None: None when the item has no media.
    """
    if not item.has_media:
        return None
    if item.is_video:
        return VideoMediaView(item, autoplay=autoplay, parent=parent)
    return ImageMediaView(item, parent=parent)
