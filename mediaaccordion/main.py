# mediaaccordion/main.py
import sys
import logging
from PySide6.QtWidgets import QApplication, QFrame

from .accordion.accordion_instance import AccordionInstance
from .accordion.items import load_page_definition, sample_page_definition
from .accordion.visibility_registry import VisibilityRegistry
from .carousel.carousel_adapter import CarouselAdapter
from .gui.accordion_widget import ACCORDION_OBJECT_NAME, AccordionPageWindow
from .settings.settings_manager import SettingsManager
from .utils.paths import ensure_assets_folders_exist
from .utils.logger_config import setup_logging

logger = logging.getLogger(__name__)


def initialize_accordions(root, registry, scheduler=None, settings_manager=None):
    """
    Creates one AccordionInstance for every AccordionContainer under root.

    Args:
        root (QWidget): The window or widget to scan; may itself be a container.
        registry (VisibilityRegistry): Shared by every instance created here.
        scheduler: Optional scheduler shared by the instances (tests pass a fake one).
        settings_manager (SettingsManager, optional): Source of timing and spacing settings.

    Returns:
        list: The created instances, in widget-tree order.
    """
    containers = root.findChildren(QFrame, ACCORDION_OBJECT_NAME)
    if root.objectName() == ACCORDION_OBJECT_NAME:
        containers.insert(0, root)

    kwargs = {}
    spacing = None
    if settings_manager is not None:
        kwargs["default_duration_ms"] = settings_manager.get_setting("default_duration_ms")
        kwargs["resize_debounce_ms"] = settings_manager.get_setting("resize_debounce_ms")
        spacing = settings_manager.get_setting("slider_spacing")

    instances = []
    for container in containers:
        carousel = CarouselAdapter(spacing=spacing) if spacing is not None else CarouselAdapter()
        instances.append(AccordionInstance(container, registry, scheduler=scheduler,
                                           carousel=carousel, **kwargs))
    logger.info(f"Initialized {len(instances)} accordion(s).")
    return instances


def teardown(instances, registry):
    """Destroys every instance, then the shared registry."""
    for instance in instances:
        instance.destroy()
    registry.destroy()


def load_page(settings_manager, argv):
    """Returns (title, definitions) from argv, the settings, or the built-in sample."""
    path = argv[1] if len(argv) > 1 else settings_manager.get_page_definition_path()
    if path:
        try:
            page = load_page_definition(path)
            settings_manager.set_setting("page_definition_path", path)
            return page
        except (FileNotFoundError, ValueError) as e:
            logger.error(f"Could not load page definition '{path}': {e}. Using the sample page.")
    return sample_page_definition()


def run_application(argv=None):
    argv = list(sys.argv if argv is None else argv)
    ensure_assets_folders_exist()
    settings_manager = SettingsManager()
    setup_logging(settings_manager)

    logger.info("------------------------------------")
    logger.info("Media Accordion Starting...")

    app = QApplication(argv)
    title, definitions = load_page(settings_manager, argv)
    window = AccordionPageWindow(title, definitions)

    registry = VisibilityRegistry(
        threshold=settings_manager.get_setting("visibility_threshold"),
        interval_ms=settings_manager.get_setting("visibility_poll_ms"),
    )
    window.show()
    instances = initialize_accordions(window, registry, settings_manager=settings_manager)
    app.aboutToQuit.connect(lambda: teardown(instances, registry))

    exit_code = app.exec()
    logger.info(f"Application exiting with code {exit_code}.")
    return exit_code


def main():
    sys.exit(run_application())


if __name__ == "__main__":
    main()
