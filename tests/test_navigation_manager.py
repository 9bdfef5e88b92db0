import pytest
from PySide6.QtCore import QSettings

from core.history_settings import HistorySettings
from core.router import Router
from ui.managers.navigation_manager import NavigationManager


@pytest.fixture
def wired():
    router = Router("/")
    manager = NavigationManager()
    manager.attach(router)
    yield manager, router
    manager.cleanup()


def test_attach_records_current_location(wired):
    manager, router = wired
    assert manager.history.entries == ("/",)
    assert manager.currentLocation == "/"
    assert manager.canGoBack is False


def test_router_navigation_is_recorded(wired):
    manager, router = wired
    router.navigate_to("/editor?file=/a.md&focus=true")
    router.navigate_to("/editor?file=/b.md")

    assert manager.history.entries == ("/", "/editor?file=/a.md", "/editor?file=/b.md")
    assert manager.canGoBack is True
    assert manager.canGoForward is False
    assert manager.currentLocation == "/editor?file=/b.md"


def test_back_and_forward_through_real_router(wired):
    manager, router = wired
    router.navigate_to("/a")
    router.navigate_to("/b")

    manager.goBack()
    assert manager.currentLocation == "/a"
    assert router.current_location == "/a"
    assert manager.canGoForward is True

    manager.goForward()
    assert manager.currentLocation == "/b"
    assert manager.history.entries == ("/", "/a", "/b")
    assert manager.history.pending_marker is None


def test_property_notifications(wired):
    manager, router = wired
    events = []
    manager.canGoBackChanged.connect(lambda: events.append("back"))
    manager.canGoForwardChanged.connect(lambda: events.append("forward"))
    manager.currentLocationChanged.connect(lambda location: events.append(location))

    router.navigate_to("/a")
    router.navigate_to("/b")
    manager.goBack()

    assert events == ["back", "/a", "/b", "forward", "/a"]


def test_stale_shortcut_is_harmless(wired):
    manager, router = wired
    manager.goBack()
    manager.goForward()
    assert manager.history.entries == ("/",)
    assert router.session_length == 1


def test_cleanup_unsubscribes(wired):
    manager, router = wired
    router.navigate_to("/a")

    manager.cleanup()
    router.navigate_to("/b")

    assert manager.history.entries == ()
    assert manager.canGoBack is False
    assert manager.currentLocation == ""


def test_attach_to_new_router_drops_old_one(wired):
    manager, old_router = wired
    old_router.navigate_to("/a")

    new_router = Router("/?folder=/work")
    manager.attach(new_router)
    old_router.navigate_to("/b")

    assert manager.history.entries == ("/?folder=/work",)


def test_root_folder_change_clears_history(wired):
    manager, router = wired
    manager.setRootFolder("/home/me/notes")
    router.navigate_to("/a")

    manager.setRootFolder("/home/me/notes/")
    assert manager.history.entries == ("/", "/a")

    manager.setRootFolder("/home/me/work")
    assert manager.history.entries == ()
    assert manager.canGoBack is False


def test_delete_and_move_hooks_prune(wired):
    manager, router = wired
    router.navigate_to("/editor?file=/notes/a.md")
    router.navigate_to("/editor?file=/notes/sub/b.md")
    router.navigate_to("/editor?file=/c.md")
    router.navigate_to("/editor?file=/d.md")

    manager.onFileMoved("/c.md", "/archive/c.md")
    assert manager.history.entries == (
        "/",
        "/editor?file=/notes/a.md",
        "/editor?file=/notes/sub/b.md",
        "/editor?file=/d.md",
    )

    manager.onFolderRemoved("/notes/sub")
    manager.onFolderMoved("/notes", "/old-notes")
    manager.onFileRemoved("/d.md")

    assert manager.history.entries == ("/",)
    assert manager.currentLocation == "/"
    assert manager.canGoBack is False


def test_settings_drive_max_size(tmp_path):
    settings = HistorySettings(QSettings(str(tmp_path / "nav.ini"), QSettings.Format.IniFormat))
    settings.set_max_size(4)

    router = Router("/")
    manager = NavigationManager(settings)
    manager.attach(router)
    for name in "abcdef":
        router.navigate_to(f"/{name}")

    assert manager.history.max_size == 4
    assert manager.history.entries == ("/c", "/d", "/e", "/f")

    settings.set_max_size(2)
    assert manager.history.entries == ("/e", "/f")
    manager.cleanup()
