"""Entry point wiring — run_chat builds, injects and releases its resources."""

from userchat import main
from userchat.config import Settings
from userchat.console import ChatConsole
from userchat.infrastructure.database import DatabaseSessionManager


class _RecordingManager(DatabaseSessionManager):
    created: list = []

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.disposed = False
        _RecordingManager.created.append(self)

    async def dispose(self) -> None:
        self.disposed = True
        await super().dispose()


async def test_run_chat_injects_one_manager_and_disposes_it(tmp_path, monkeypatch):
    _RecordingManager.created = []
    seen = {}

    async def _no_loop(self):
        seen["runner"] = self.runner
        seen["result"] = await self.runner.dispatch.handle("list_users")

    monkeypatch.setattr(main, "DatabaseSessionManager", _RecordingManager)
    monkeypatch.setattr(ChatConsole, "run", _no_loop)
    settings = Settings(
        _env_file=None,
        database_url=f"sqlite:///{tmp_path / 'chat.db'}",
        llm_base_url="http://127.0.0.1:9",
    )

    await main.run_chat(settings)

    assert len(_RecordingManager.created) == 1
    manager = _RecordingManager.created[0]
    assert manager.disposed
    assert seen["runner"].dispatch._db_manager is manager
    assert seen["result"] == "No users in database"
    assert (tmp_path / "chat.db").exists()
