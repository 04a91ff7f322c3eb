"""
This module contains the IOInterface abstract base class and its implementations.
"""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from concurrent.futures import ThreadPoolExecutor
from typing import Optional

import aiofiles

from twentyone.blackjack.action import Action


class IOInterface(ABC):
    """
    Abstract base class for an IO interface.

    This class defines the line-oriented input/output a table needs.
    """

    @abstractmethod
    def output(self, message: str) -> None:
        """Output a message to the interface."""
        pass

    @abstractmethod
    def input(self, prompt: str) -> str:
        """Get input from the user with a prompt."""
        pass

    def get_player_action(self, valid_actions: list[Action]) -> Action:
        """
        Ask for an action until one of `valid_actions` is entered.

        Accepts the action name, its value, or its shortcut key.
        """
        shortcuts = {action.shortcut: action for action in valid_actions}
        attempts = 0
        while attempts < 3:
            choice = self.input(
                f"Action ({', '.join(f'[{a.shortcut}]{a.value}' for a in valid_actions)}): "
            ).strip().lower()
            if choice in shortcuts:
                return shortcuts[choice]
            for action in valid_actions:
                if choice in (action.value, action.name.lower()):
                    return action
            self.output(
                f"Invalid action, valid actions are: {', '.join(a.value for a in valid_actions)}"
            )
            attempts += 1
        raise ValueError("Too many invalid attempts.")

    def check_numeric_response(self, ctx: str) -> Optional[int]:
        """
        Ask for a whole number; an empty answer or "q" returns None.
        """
        attempts = 0
        while attempts < 3:
            response = self.input(ctx).strip().lower()
            if response in ("", "q", "quit"):
                return None
            try:
                return int(response)
            except ValueError:
                self.output("Invalid response, please enter a number.")
                attempts += 1
        raise ValueError("Too many invalid responses.")


class TestIOInterface(IOInterface):
    """
    A test IO interface for testing purposes. Collects output messages and
    replays queued input responses.
    """

    __test__ = False

    def __init__(self, responses: Optional[list[str]] = None):
        self.sent_messages: list[str] = []
        self.input_responses: list[str] = list(responses or [])
        self.prompts: list[str] = []

    def output(self, message: str) -> None:
        self.sent_messages.append(message)

    def input(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.input_responses:
            return self.input_responses.pop(0)
        return ""


class ConsoleIOInterface(IOInterface):
    """
    A console IO interface for interactive play.
    """

    def output(self, message: str) -> None:
        print(message)

    def input(self, prompt: str) -> str:
        return input(prompt)


class LoggingIOInterface(IOInterface):
    """
    Wraps another IO interface and appends a transcript of the session to a file.

    Output is written synchronously through `output` or asynchronously
    through `output_async`.
    """

    def __init__(self, log_file_path: str, inner: Optional[IOInterface] = None):
        self.log_file_path = log_file_path
        self.inner = inner or ConsoleIOInterface()

    def output(self, message: str) -> None:
        """Write an output message to the inner interface and the log file."""
        self.inner.output(message)
        with open(self.log_file_path, "a", encoding="utf-8") as log_file:
            log_file.write(message + "\n")

    def input(self, prompt: str) -> str:
        """Ask the inner interface and record the exchange."""
        response = self.inner.input(prompt)
        with open(self.log_file_path, "a", encoding="utf-8") as log_file:
            log_file.write(f"{prompt}{response}\n")
        return response

    async def output_async(self, message: str) -> None:
        """Async version of output."""
        self.inner.output(message)
        async with aiofiles.open(
            self.log_file_path, mode="a", encoding="utf-8"
        ) as log_file:
            await log_file.write(message + "\n")


class AsyncIOInterfaceWrapper:
    """
    A wrapper class to facilitate asynchronous execution of synchronous IO operations
    defined in an IOInterface implementation. This class uses a ThreadPoolExecutor to
    run synchronous methods in separate threads, allowing them to be awaited in an
    asynchronous context without blocking the event loop.
    """

    def __init__(self, io_interface: IOInterface):
        self.io_interface = io_interface
        self.executor = ThreadPoolExecutor(max_workers=1)

    async def output(self, message: str) -> None:
        if isinstance(self.io_interface, LoggingIOInterface):
            await self.io_interface.output_async(message)
            return
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(self.executor, self.io_interface.output, message)

    async def input(self, prompt: str) -> str:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(
            self.executor, self.io_interface.input, prompt
        )

    async def get_player_action(self, valid_actions: list[Action]) -> Action:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(
            self.executor, self.io_interface.get_player_action, valid_actions
        )

    async def check_numeric_response(self, ctx: str) -> Optional[int]:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(
            self.executor, self.io_interface.check_numeric_response, ctx
        )

    def shutdown(self) -> None:
        self.executor.shutdown(wait=False)
