"""Centralized message constants for error messages, log templates, and console output."""

from __future__ import annotations


class ErrorMessages:
    """Error messages for exceptions and validation failures."""

    # Track Validation Errors
    EMPTY_TRACK_ID = "Track ID cannot be empty"
    INVALID_TRACK_ID = "Track ID '{value}' contains characters that are not URL-safe"

    # Settings Validation Errors
    INVALID_LOG_LEVEL = "Invalid log level: {level}. Must be one of {valid_levels}"
    EMPTY_EXECUTABLE = "Player executable cannot be empty"

    # Process Errors
    PROCESS_ALREADY_STARTED = "Playback process has already been started"

    # Container
    SHUTDOWN_NOT_INSTALLED = "Shutdown coordinator not installed. Call install() first."


class LogTemplates:
    """Log message templates for structured logging.

    Use these with logger.info(), logger.error(), etc. and pass values as parameters
    for proper log formatting and structured logging support.
    """

    # Session Controller
    PLAYLIST_REPLACED = "Playlist replaced with %d tracks, starting at index %d"
    PLAYLIST_REJECTED = "Ignoring playlist of %d tracks with start index %d"
    PLAY_NO_CURRENT_TRACK = "Nothing to play: playlist is empty"
    TRANSITION_IN_PROGRESS = "Track transition in progress, rejecting switch to '%s'"
    TRANSITION_GUARD_ELAPSED = "Transition guard elapsed"
    TRANSITION_GUARD_NO_LOOP = "No running event loop for the transition guard; releasing it now"
    TRACK_STARTING = "Starting '%s' (%s) at index %d"
    TRACK_START_FAILED = "Failed to launch playback for '%s'"
    TRACK_FINISHED = "Track finished: '%s'"
    TRACK_STOPPED_WITH_CODE = "Track '%s' stopped with code %s"
    TRACK_PROCESS_FAILED = "Player process failed for '%s': %s"
    PLAYER_EXECUTABLE_MISSING = "Player executable missing while playing '%s': %s"
    STALE_EVENT_IGNORED = "Ignoring %s from superseded process (pid=%s)"
    AUTO_ADVANCE_SCHEDULED = "Auto-advancing in %.2fs"
    AUTO_ADVANCE_RESULT = "Auto-advance finished with status %s"
    NAVIGATION_SKIPPED = "Navigation skipped: %s"
    PLAYBACK_STOPPED = "Playback stopped by user"
    CLEANUP_TERMINATING = "Cleanup terminating player process (pid=%s)"
    CLEANUP_DONE = "Session cleanup complete"
    PROCESS_RETIRED = "Retired player process (pid=%s), force kill in %.1fs"
    PROCESS_TERMINATE_FAILED = "Failed to request termination of player process (pid=%s)"
    RETIRED_REAPED = "Force-terminating %d retired player process(es)"

    # Player Process
    PROCESS_SPAWNED = "Spawned %s (pid=%s)"
    PROCESS_SPAWN_FAILED = "Failed to spawn %s: %s"
    PROCESS_EXITED = "Player process %s exited with code %s"
    PROCESS_SIGNAL_FAILED = "Could not signal player process %s: %r"
    PROCESS_FORCE_KILL = "Player process %s did not exit in time, force killing"
    PROCESS_TASK_FAILED = "Player process watcher crashed"

    # Search
    SEARCH_STARTED = "Searching catalog for %r (limit=%d)"
    SEARCH_COMPLETED = "Search for %r returned %d playable tracks"
    SEARCH_FAILED = "Failed to search for %r"
    SEARCH_ENTRY_SKIPPED = "Skipping search entry %r: %s"

    # Event Bus
    EVENT_SUBSCRIBED = "Subscribed handler to: %s"
    EVENT_UNSUBSCRIBED = "Unsubscribed handler from %s"
    EVENT_NO_HANDLERS = "No handlers for %s"
    EVENT_HANDLER_FAILED = "Error in handler for %s"
    EVENT_BUS_CLEARED = "Cleared all event handlers"

    # Commands / Menu
    COMMAND_DISPATCHED = "Dispatching menu action %s"
    MENU_INPUT_CLOSED = "Input stream closed, leaving menu"

    # Application Lifecycle
    APP_STARTING = "Starting CLI music player in {environment} mode"
    APP_STOPPED = "CLI music player stopped with exit code %d"
    APP_FATAL_ERROR = "Fatal error: %s"
    APP_KEYBOARD_INTERRUPT = "Received keyboard interrupt, shutting down..."
    PLAYER_NOT_FOUND = "Player executable %r not found on PATH"
    SIGNAL_RECEIVED = "Received %s, cleaning up..."
    SIGNAL_HANDLER_UNAVAILABLE = "Cannot install handler for %s on this platform"
    UNCAUGHT_EXCEPTION = "Uncaught exception"
    UNHANDLED_ASYNC_ERROR = "Unhandled asynchronous error: %s"
    SHUTDOWN_EXIT_SCHEDULED = "Exiting with code %d in %.1fs"


class ConsoleMessages:
    """User-facing console messages.

    These strings are shown directly in the terminal and may contain rich markup.
    """

    BANNER = "[bold blue]CLI Music Player[/]"
    GOODBYE = "[green]Goodbye![/]"
    MENU_TITLE = "Music Player Menu"

    # Search
    SEARCH_PROMPT = "Enter search query"
    SELECT_PROMPT = "Select a track to play"
    SEARCHING = "[gray50]Searching for '{query}'...[/]"
    NO_RESULTS = "[red]No results found[/]"
    CANCEL_OPTION = "Cancel"
    SELECTION_CANCELLED = "[gray50]Selection cancelled[/]"

    # Playlist / Now Playing
    PLAYLIST_EMPTY = "[yellow]Playlist is empty[/]"
    PLAYLIST_HEADER = "[bold blue]Current Playlist:[/]"
    NOTHING_PLAYING = "[yellow]No track is currently playing[/]"
    NOW_PLAYING_HEADER = "[bold yellow]Now Playing:[/]"
    NOW_PLAYING_DETAILS_HEADER = "[bold green]Now Playing:[/]"

    # Navigation
    ONLY_ONE_TRACK = "[yellow]Only one track in playlist[/]"
    END_OF_PLAYLIST = "[yellow]Reached end of playlist[/]"
    TRANSITION_IN_PROGRESS = "[yellow]Track transition in progress, please wait...[/]"
    INVALID_SELECTION = "[red]Invalid track selection[/]"
    START_FAILED = "[red]Could not start playback[/]"
    PLAYBACK_STOPPED = "[yellow]Playback stopped[/]"
    NOTHING_TO_STOP = "[yellow]Nothing is playing[/]"

    # Player process notices
    TRACK_FINISHED = "[gray50]Track finished playing[/]"
    TRACK_STOPPED_WITH_CODE = "[red]Track stopped with code: {code}[/]"
    PLAYER_ERROR = "[red]MPV Error:[/] {reason}"
    PLAYER_MISSING = (
        "[red]MPV not found! It may have been uninstalled or removed from PATH.[/]"
    )
    PLAYER_MISSING_HINT = (
        "[yellow]Please restart the application after reinstalling MPV, "
        "or install it manually.[/]"
    )
    PLAYER_NOT_INSTALLED = "[bold red]MPV Media Player not found![/]"
    PLAYER_REQUIRED = "[yellow]MPV is required for audio playback in the terminal music player.[/]"
    PLAYER_INSTALL_HINT = (
        "[gray50]Visit https://mpv.io/installation/ for installation instructions.[/]"
    )

    # Lifecycle
    SHUTTING_DOWN = "[yellow]Received {reason}, cleaning up...[/]"
    CLEANUP_COMPLETE = "[green]Cleanup complete. Goodbye![/]"
    FATAL_SHUTDOWN = "[red]Fatal error: {reason}[/]"
