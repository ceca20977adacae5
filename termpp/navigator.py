"""Slide navigation: the drive loop and the controllers that run it."""

from __future__ import annotations

import enum
import logging
import time
from typing import Callable, Optional

from .backend import Backend, InteractiveBackend
from .config import Settings
from .dispatch import Dispatcher
from .document import Capture, Document, Page, load_document
from .shell import capture_output, editor_command

logger = logging.getLogger(__name__)


class KeyAction(enum.Enum):
    ADVANCE = "advance"
    RETREAT = "retreat"
    QUIT = "quit"
    RELOAD = "reload"
    FIRST_PAGE = "first_page"
    JUMP = "jump"
    HELP = "help"
    EDIT = "edit"
    RESIZE = "resize"


class Navigator:
    """State machine over (page index, line cursor, end-of-page).

    The line cursor lives on the current ``Page``. ``eop`` is only reported
    once a pass exhausts the page without stopping on a pause, so a trailing
    ``---`` still holds the presenter for one more step.
    """

    def __init__(self, document: Document, dispatcher: Dispatcher, backend: Backend, page_index: int = 0):
        if not len(document):
            raise ValueError("document has no pages")
        self.document = document
        self.dispatcher = dispatcher
        self.backend = backend
        self.page_index = min(max(page_index, 0), len(document) - 1)
        self.eop = False
        self.reload_requested = False
        self.quit = False

    @property
    def page(self) -> Page:
        return self.document[self.page_index]

    @property
    def page_count(self) -> int:
        return len(self.document)

    def drive(self) -> bool:
        """Dispatch lines until a pause or the end of the page.

        Returns True when the pass stopped on a pause marker.
        """
        page = self.page
        paused = False
        while not page.end_of_page and not paused:
            line = page.next_line()
            if line is None:
                break
            paused = self.dispatcher.dispatch(line)
        self.eop = page.end_of_page and not paused
        return paused

    def _show(self, index: int) -> None:
        self.page_index = index
        self.page.reset()
        self.eop = False
        self.backend.new_page()

    def advance(self) -> bool:
        """Go to the next page if the current one is finished."""
        if self.eop and self.page_index + 1 < self.page_count:
            self._show(self.page_index + 1)
            return True
        return False

    def retreat(self) -> bool:
        if self.page_index > 0:
            self._show(self.page_index - 1)
            return True
        return False

    def jump(self, index: Optional[int]) -> bool:
        if index is None or not 0 <= index < self.page_count:
            return False
        self._show(index)
        return True

    def first_page(self) -> None:
        self._show(0)

    def wrap_forward(self) -> None:
        """Next page, or back to the first one after the last page."""
        self._show((self.page_index + 1) % self.page_count)

    def draw_status(self) -> None:
        if isinstance(self.backend, InteractiveBackend):
            self.backend.draw_status(self.page_index + 1, self.page_count, self.eop, self.page.title)
        self.backend.refresh()

    def handle(self, action: KeyAction) -> bool:
        """Apply an interactive transition.

        Returns True when the controller should resume the drive loop and
        False when it should read another key (or stop, see ``quit`` and
        ``reload_requested``).
        """
        if action is KeyAction.QUIT:
            self.quit = True
            return False
        if action is KeyAction.RELOAD:
            self.reload_requested = True
            return False
        if action is KeyAction.ADVANCE:
            self.advance()
        elif action is KeyAction.RETREAT:
            self.retreat()
        elif action is KeyAction.FIRST_PAGE:
            self.first_page()
        else:
            return False
        return True


class InteractiveController:
    """Feed the backend until it pauses, then act on a key press."""

    def __init__(
        self,
        path: str,
        backend: InteractiveBackend,
        settings: Optional[Settings] = None,
        capture: Capture = capture_output,
    ):
        self.path = path
        self.backend = backend
        self.settings = settings or Settings()
        self.capture = capture
        self.dispatcher = Dispatcher(backend)
        self.navigator: Optional[Navigator] = None

    def run(self) -> None:
        page_index = 0
        while True:
            document = load_document(self.path, self.capture)
            self.navigator = Navigator(document, self.dispatcher, self.backend, page_index)
            self.backend.clear()
            self.backend.new_page()
            self._present()
            if not self.navigator.reload_requested:
                return
            page_index = self.navigator.page_index
            logger.info("Reloading %s at page %d", self.path, page_index + 1)

    def _present(self) -> None:
        nav = self.navigator
        while True:
            nav.draw_status()
            nav.drive()
            nav.draw_status()
            if not self._read_keys():
                return

    def _read_keys(self) -> bool:
        """Handle keys until one resumes the drive loop; False to stop."""
        nav = self.navigator
        while True:
            action = self.backend.read_key()
            if nav.handle(action):
                return True
            if nav.quit or nav.reload_requested:
                return False
            if action is KeyAction.JUMP:
                saved = self.backend.store_screen()
                if nav.jump(self.backend.read_page_number(nav.document.pages, nav.page_index)):
                    return True
                self.backend.restore_screen(saved)
            elif action is KeyAction.EDIT:
                self._edit()
            elif action is KeyAction.HELP:
                saved = self.backend.store_screen()
                self.backend.show_help()
                self.backend.read_key()
                self.backend.clear()
                self.backend.restore_screen(saved)
            elif action is KeyAction.RESIZE:
                self.backend.update_size()

    def _edit(self) -> None:
        target = self.dispatcher.last_included_file or self.path
        saved = self.backend.store_screen()
        self.backend.exec_command(editor_command(self.settings.editor, target))
        self.backend.restore_screen(saved)


class AutoplayController:
    """Unattended presentation: resume after a fixed delay instead of a key."""

    def __init__(
        self,
        path: str,
        backend: Backend,
        seconds: float = 1.0,
        sleep: Callable[[float], None] = time.sleep,
        capture: Capture = capture_output,
        max_passes: Optional[int] = None,
    ):
        self.path = path
        self.backend = backend
        self.seconds = seconds
        self.sleep = sleep
        self.capture = capture
        self.max_passes = max_passes
        self.dispatcher = Dispatcher(backend)
        self.navigator: Optional[Navigator] = None

    def run(self) -> None:
        document = load_document(self.path, self.capture)
        self.navigator = Navigator(document, self.dispatcher, self.backend)
        if isinstance(self.backend, InteractiveBackend):
            self.backend.clear()
        self.backend.new_page()
        passes = 0
        while self.max_passes is None or passes < self.max_passes:
            self.step()
            passes += 1

    def step(self) -> None:
        """One drive pass, a status redraw and the delay."""
        nav = self.navigator
        nav.draw_status()
        nav.drive()
        nav.draw_status()
        if nav.eop:
            nav.wrap_forward()
        self.sleep(self.seconds)


class ConversionController:
    """Run every line of every page through an exporter."""

    def __init__(self, path: str, backend: Backend, capture: Capture = capture_output):
        self.document = load_document(path, capture)
        self.backend = backend
        self.dispatcher = Dispatcher(backend)

    def run(self) -> None:
        for index, page in enumerate(self.document):
            page.reset()
            if index:
                self.backend.new_page()
            while not page.end_of_page:
                line = page.next_line()
                if line is None:
                    break
                self.dispatcher.dispatch(line)
