# mediaaccordion/gui/widget_helpers.py
import logging
from PySide6.QtWidgets import QPushButton

logger = logging.getLogger(__name__)


def create_button(text, object_name=None, tooltip=None, on_click=None, icon=None):
    """
    Creates and configures a QPushButton instance.

    Args:
        text (str): The text to display on the button.
        object_name (str, optional): objectName used by style sheets and lookups.
        tooltip (str, optional): The tooltip text for the button.
        on_click (callable, optional): Connected to the button's clicked signal.
        icon (QIcon, optional): Icon shown next to the text.

    Returns:
        QPushButton: The configured QPushButton instance.
    """
    button = QPushButton(text)
    if object_name:
        button.setObjectName(object_name)
    if icon is not None:
        button.setIcon(icon)
    if tooltip:
        button.setToolTip(tooltip)

    if on_click and callable(on_click):
        button.clicked.connect(on_click)
    elif on_click:
        logger.warning(f"Provided on_click for button '{text}' is not callable: {on_click}")

    return button


def set_style_flag(widget, name, enabled):
    """
    Sets a boolean dynamic property used as a style-sheet selector
    (e.g. QFrame[active="true"]) and re-polishes the widget so the
    style sheet picks the change up. Returns True if the value changed.
    """
    if widget is None:
        return False
    enabled = bool(enabled)
    if bool(widget.property(name)) == enabled:
        return False
    widget.setProperty(name, enabled)
    style = widget.style()
    style.unpolish(widget)
    style.polish(widget)
    widget.update()
    return True


def clear_layout(layout):
    """Removes and schedules deletion of every widget in a layout."""
    removed = []
    while layout is not None and layout.count():
        layout_item = layout.takeAt(0)
        child = layout_item.widget()
        if child is not None:
            child.hide()
            child.setParent(None)
            child.deleteLater()
            removed.append(child)
    return removed
