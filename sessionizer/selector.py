import logging

from sessionizer.errors import InvalidArgumentsError
from sessionizer.interfaces import DirectoryIndexer, InteractivePicker, SessionRegistry
from sessionizer.models import InvocationMode, ResolvedTarget

logger = logging.getLogger(__name__)

# tmux rejects these in session names
_FORBIDDEN_NAME_CHARS = (".", ":")


class Selector:
    """Turns menu output, CLI arguments, or an interactive pick into a target.

    Resolution only ever uses exact, case-sensitive membership in the live
    session set. When a candidate is both a live session name and an indexed
    directory, the session wins.
    """

    def __init__(
        self,
        mode: InvocationMode,
        registry: SessionRegistry,
        indexer: DirectoryIndexer,
        picker: InteractivePicker,
    ) -> None:
        self.mode = mode
        self.registry = registry
        self.indexer = indexer
        self.picker = picker
        self._sessions: list[str] | None = None
        self._directories: list[str] | None = None

    @property
    def sessions(self) -> list[str]:
        if self._sessions is None:
            self._sessions = self.registry.list_sessions()
        return self._sessions

    @property
    def directories(self) -> list[str]:
        if self._directories is None:
            self._directories = self.indexer.index()
        return self._directories

    def candidates(self) -> list[str]:
        """Live sessions followed by indexed directories, for the menu's list phase."""
        live = set(self.sessions)
        dirs = []
        for d in self.directories:
            if d in live:
                logger.warning("Directory collides with a live session name, listing the session", extra={"candidate": d})
                continue
            dirs.append(d)
        return [*self.sessions, *dirs]

    def resolve(self, args: list[str] | tuple[str, ...]) -> ResolvedTarget:
        if self.mode is InvocationMode.LIST:
            raise ValueError("list mode produces candidates, not a target")
        if self.mode is InvocationMode.MENU_SELECTION:
            return self._resolve_menu_selection(" ".join(args))
        return self._resolve_direct(list(args))

    def _resolve_menu_selection(self, text: str) -> ResolvedTarget:
        if not text:
            return ResolvedTarget.cancelled()
        if text in self.sessions:
            return ResolvedTarget.session(text)
        return ResolvedTarget.for_path(text)

    def _resolve_direct(self, args: list[str]) -> ResolvedTarget:
        if not args:
            path = self.picker.pick(self.directories)
            if not path:
                return ResolvedTarget.cancelled()
            return ResolvedTarget.for_path(path)

        name = args[0]
        if not name:
            raise InvalidArgumentsError("session name must not be empty")
        if any(c in name for c in _FORBIDDEN_NAME_CHARS):
            raise InvalidArgumentsError(f"session name {name!r} must not contain '.' or ':'")

        if len(args) == 1:
            if name in self.sessions:
                return ResolvedTarget.session(name)
            path = self.picker.pick(self.directories)
            # An empty path here is rejected later when the session has to be created.
            return ResolvedTarget(name=name, path=path)

        if len(args) > 2:
            logger.debug("Ignoring extra arguments", extra={"extra_args": args[2:]})
        path = args[1]
        if not path:
            raise InvalidArgumentsError("path must not be empty")
        return ResolvedTarget.for_path(path, name=name)
