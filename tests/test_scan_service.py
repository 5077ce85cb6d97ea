"""Tests for ScanService."""

from pathlib import Path

import pytest

from codequeue.models import PublishResult
from codequeue.services import ConfigService, ScanService, document_id
from codequeue.state import MemoryStateStore, StateStore


class RecordingProvider:
    """Provider that numbers created items."""

    id = "recording"
    display_name = "Recording"
    requires_authentication = False

    def __init__(self):
        self.published = []
        self.archived = []

    def authenticate(self):
        return True

    def validate_configuration(self):
        return True

    def get_projects(self):
        return []

    def get_statuses(self):
        return []

    def publish_task(self, task):
        self.published.append(task)
        return f"item-{len(self.published)}"

    def publish_tasks(self, tasks):
        return [PublishResult(hash=t.hash, item_id=self.publish_task(t)) for t in tasks]

    def archive_task(self, item_id):
        self.archived.append(item_id)


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    root = tmp_path / "project"
    root.mkdir()
    return root


@pytest.fixture
def provider() -> RecordingProvider:
    return RecordingProvider()


@pytest.fixture
def store() -> MemoryStateStore:
    return MemoryStateStore()


@pytest.fixture
def service(project_root: Path, store, provider) -> ScanService:
    return ScanService(ConfigService(project_root), store, provider)


class TestDocumentId:
    """Tests for document_id function."""

    def test_absolute(self, project_root: Path, monkeypatch):
        """Relative paths resolve to the same ID as absolute ones."""
        path = project_root / "a.py"
        monkeypatch.chdir(project_root)
        assert document_id(Path("a.py")) == document_id(path)
        assert Path(document_id(path)).is_absolute()


class TestScanFile:
    """Tests for ScanService.scan_file."""

    def test_scan_creates_tasks(self, service, project_root: Path, provider, store):
        """TODOs in a file are published and recorded."""
        path = project_root / "a.py"
        path.write_text("# TODO(bug): first\nx = 1\n\n# TODO: second\n")

        result = service.scan_file(path)

        assert result.created_count == 2
        assert [t.title for t in provider.published] == ["first", "second"]
        assert provider.published[0].snippet == "x = 1"
        assert {e.file for e in store.load()} == {document_id(path)}

    def test_save_after_removal_archives(self, service, project_root: Path, provider):
        """Removing a TODO and scanning again archives it."""
        path = project_root / "a.py"
        path.write_text("# TODO: first\n# TODO: second\n")
        service.scan_file(path)

        path.write_text("# TODO: second\n")
        result = service.scan_file(path)

        assert result.archived == ["item-1"]
        assert provider.archived == ["item-1"]

    def test_snippet_settings_applied(self, project_root: Path, store, provider):
        """Scanner settings from codequeue.yml are used."""
        (project_root / "codequeue.yml").write_text(
            "scanner:\n  snippet_extraction_enabled: false\n"
        )
        service = ScanService(ConfigService(project_root), store, provider)
        path = project_root / "a.py"
        path.write_text("# TODO: x\ncode()\n")

        service.scan_file(path)

        assert provider.published[0].snippet == ""

    def test_on_save_disabled(self, project_root: Path, store, provider):
        """Save-triggered scans are skipped when auto scan is off."""
        (project_root / "codequeue.yml").write_text("scanner:\n  auto_scan_on_save: false\n")
        service = ScanService(ConfigService(project_root), store, provider)
        path = project_root / "a.py"
        path.write_text("# TODO: x\n")

        assert service.scan_file(path, on_save=True) is None
        assert provider.published == []
        assert service.scan_file(path).created_count == 1

    def test_undecodable_bytes(self, service, project_root: Path, provider):
        """Invalid UTF-8 does not stop the scan."""
        path = project_root / "a.py"
        path.write_bytes(b"# TODO: caf\xe9\n")

        assert service.scan_file(path).created_count == 1

    def test_persists_to_state_file(self, project_root: Path, provider, tmp_path: Path):
        """Results survive in a file-backed store."""
        state = StateStore(tmp_path / "state.yaml")
        service = ScanService(ConfigService(project_root), state, provider)
        path = project_root / "a.py"
        path.write_text("# TODO: x\n")

        service.scan_file(path)
        reopened = StateStore(tmp_path / "state.yaml")
        again = ScanService(ConfigService(project_root), reopened, provider)

        assert again.scan_file(path).is_noop
        assert len(provider.published) == 1


class TestScanFiles:
    """Tests for ScanService.scan_files."""

    def test_missing_file_skipped(self, service, project_root: Path):
        """Unreadable files are logged and skipped."""
        good = project_root / "good.py"
        good.write_text("# TODO: x\n")

        results = service.scan_files([project_root / "missing.py", good])

        assert [r.file for r in results] == [document_id(good)]


class TestScanText:
    """Tests for ScanService.scan_text and plan_file."""

    def test_scan_text(self, service, provider):
        """Unsaved text can be reconciled directly."""
        result = service.scan_text("/virtual/doc.md", ["<!-- TODO(docs): intro -->"])
        assert result.created_count == 1
        assert provider.published[0].tag == "docs"

    def test_plan_file(self, service, project_root: Path, provider):
        """plan_file previews without publishing."""
        path = project_root / "a.py"
        path.write_text("# TODO: x\n")

        additions, removals = service.plan_file(path)

        assert [t.title for t in additions] == ["x"]
        assert removals == []
        assert provider.published == []
