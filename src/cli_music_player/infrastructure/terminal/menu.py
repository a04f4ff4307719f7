"""Interactive main menu."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any

from rich.prompt import IntPrompt, Prompt

from cli_music_player.application.commands.playback_commands import MenuAction
from cli_music_player.domain.shared.messages import ConsoleMessages, LogTemplates

from .input import read_in_thread

if TYPE_CHECKING:
    from cli_music_player.application.commands.playback_commands import PlaybackCommandHandler
    from cli_music_player.application.queries.get_current import GetCurrentTrackHandler
    from cli_music_player.application.queries.get_playlist import GetPlaylistHandler

    from .presenter import ConsolePresenter

logger = logging.getLogger(__name__)

PromptReader = Callable[[Callable[[], Any]], Awaitable[Any]]

_ACTIONS: tuple[MenuAction, ...] = tuple(MenuAction)


class TerminalMenu:
    """Loops over the main menu until the user exits or input closes.

    Each choice maps to one command or query; the menu itself holds no
    playback state.
    """

    def __init__(
        self,
        *,
        presenter: ConsolePresenter,
        command_handler: PlaybackCommandHandler,
        current_track_handler: GetCurrentTrackHandler,
        playlist_handler: GetPlaylistHandler,
        prompt_reader: PromptReader = read_in_thread,
    ) -> None:
        self._presenter = presenter
        self._commands = command_handler
        self._current = current_track_handler
        self._playlist = playlist_handler
        self._read = prompt_reader

    async def run(self) -> None:
        while True:
            action = await self.choose_action()
            if action is None or action == MenuAction.EXIT:
                self._commands.exit()
                return
            await self.dispatch(action)

    async def choose_action(self) -> MenuAction | None:
        console = self._presenter.console
        console.print()
        console.print(f"[bold]{ConsoleMessages.MENU_TITLE}[/]")
        for number, action in enumerate(_ACTIONS, start=1):
            console.print(f"[cyan]{number}.[/] {action.value}")

        choices = [str(number) for number in range(1, len(_ACTIONS) + 1)]
        choice = await self._ask(
            lambda: IntPrompt.ask("Choose", console=console, choices=choices, show_choices=False)
        )
        if choice is None:
            return None
        return _ACTIONS[choice - 1]

    async def dispatch(self, action: MenuAction) -> None:
        match action:
            case MenuAction.SEARCH:
                await self.search_and_play()
            case MenuAction.SHOW:
                self._presenter.playlist(self._playlist.handle())
            case MenuAction.NOW:
                self._presenter.now_playing(self._current.handle())
            case MenuAction.NEXT | MenuAction.PREVIOUS | MenuAction.STOP:
                self._presenter.result(self._commands.handle(action))
            case MenuAction.EXIT:
                self._commands.exit()

    async def search_and_play(self) -> None:
        console = self._presenter.console
        query = await self._ask(lambda: Prompt.ask(ConsoleMessages.SEARCH_PROMPT, console=console))
        if query is None:
            return

        self._presenter.message(ConsoleMessages.SEARCHING.format(query=query.strip()))
        outcome = await self._commands.search(query)
        if not outcome.has_results:
            self._presenter.message(outcome.message)
            return

        self._presenter.search_results(outcome.tracks)
        choices = [str(number) for number in range(len(outcome.tracks) + 1)]
        selected = await self._ask(
            lambda: IntPrompt.ask(
                ConsoleMessages.SELECT_PROMPT,
                console=console,
                choices=choices,
                show_choices=False,
                default=0,
            )
        )
        index = selected - 1 if selected else None
        self._presenter.result(self._commands.play_selection(outcome.tracks, index))

    async def _ask(self, prompt: Callable[[], Any]) -> Any:
        """Read one answer; None when the input stream is closed."""
        try:
            return await self._read(prompt)
        except EOFError:
            logger.info(LogTemplates.MENU_INPUT_CLOSED)
            return None
