"""Per-interaction wrapper enforcing Discord's acknowledge-once discipline.

A slash-command interaction must be acknowledged exactly once: either with an
immediate reply, or with a deferral that is later edited into the final
message. :class:`InteractionContext` tracks that state and refuses any
transition that would break it before a request is ever sent.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

import discord

from discord_music_bridge.domain.shared.exceptions import InvalidReplyStateError, PreconditionError
from discord_music_bridge.domain.shared.messages import DiscordUIMessages
from discord_music_bridge.infrastructure.discord.renderer import RenderedMessage, to_embed


class ReplyState(StrEnum):
    UNACKNOWLEDGED = "unacknowledged"
    DEFERRED = "deferred"
    REPLIED = "replied"


def parse_options(data: Any) -> dict[str, Any]:
    """Flatten ``interaction.data["options"]`` into ``{name: value}``."""
    if not isinstance(data, dict):
        return {}
    options = data.get("options") or []
    return {
        opt["name"]: opt.get("value")
        for opt in options
        if isinstance(opt, dict) and "name" in opt
    }


def _message_kwargs(message: RenderedMessage | str) -> dict[str, Any]:
    if isinstance(message, RenderedMessage):
        return {"embed": to_embed(message)}
    return {"content": message}


class InteractionContext:
    def __init__(self, interaction: discord.Interaction) -> None:
        self.interaction = interaction
        data = interaction.data if isinstance(interaction.data, dict) else {}
        self.command_name: str = str(data.get("name", ""))
        self.options: dict[str, Any] = parse_options(data)
        self._state = ReplyState.UNACKNOWLEDGED
        self._history: list[str] = []

    # ─────────────────────────────────────────────────────────────────
    # Invocation details
    # ─────────────────────────────────────────────────────────────────

    @property
    def guild_id(self) -> int | None:
        return self.interaction.guild_id

    @property
    def channel_id(self) -> int | None:
        return self.interaction.channel_id

    @property
    def user_id(self) -> int:
        return self.interaction.user.id

    @property
    def member(self) -> discord.Member | None:
        user = self.interaction.user
        return user if isinstance(user, discord.Member) else None

    @property
    def voice_channel(self) -> discord.abc.GuildChannel | None:
        member = self.member
        if member is None or member.voice is None:
            return None
        return member.voice.channel

    def require_guild_id(self) -> int:
        if self.guild_id is None:
            raise PreconditionError(DiscordUIMessages.STATE_SERVER_ONLY)
        return self.guild_id

    def require_member(self) -> discord.Member:
        member = self.member
        if member is None:
            raise PreconditionError(DiscordUIMessages.STATE_VERIFY_VOICE_FAILED)
        return member

    def require_voice_channel(self) -> discord.abc.GuildChannel:
        channel = self.voice_channel
        if channel is None:
            raise PreconditionError(DiscordUIMessages.STATE_NEED_TO_BE_IN_VOICE)
        return channel

    def get_string(self, name: str, default: str | None = None) -> str | None:
        value = self.options.get(name)
        if value is None:
            return default
        value = str(value).strip()
        return value or default

    def get_integer(self, name: str, default: int | None = None) -> int | None:
        value = self.options.get(name)
        if value is None:
            return default
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    # ─────────────────────────────────────────────────────────────────
    # Acknowledgment
    # ─────────────────────────────────────────────────────────────────

    @property
    def state(self) -> ReplyState:
        return self._state

    @property
    def history(self) -> tuple[str, ...]:
        """Acknowledgment actions performed so far, oldest first."""
        return tuple(self._history)

    def _require(self, action: str, expected: ReplyState) -> None:
        if self._state is not expected:
            raise InvalidReplyStateError(action, self._state.value)

    def _advance(self, action: str, new_state: ReplyState) -> None:
        self._history.append(action)
        self._state = new_state

    async def reply(self, message: RenderedMessage | str, *, ephemeral: bool = False) -> None:
        self._require("reply", ReplyState.UNACKNOWLEDGED)
        await self.interaction.response.send_message(**_message_kwargs(message), ephemeral=ephemeral)
        self._advance("reply", ReplyState.REPLIED)

    async def defer(self, *, ephemeral: bool = False) -> None:
        self._require("defer", ReplyState.UNACKNOWLEDGED)
        await self.interaction.response.defer(ephemeral=ephemeral, thinking=True)
        self._advance("defer", ReplyState.DEFERRED)

    async def edit_reply(self, message: RenderedMessage | str) -> None:
        self._require("edit_reply", ReplyState.DEFERRED)
        if isinstance(message, RenderedMessage):
            await self.interaction.edit_original_response(embed=to_embed(message))
        else:
            await self.interaction.edit_original_response(content=message)
        self._advance("edit_reply", ReplyState.REPLIED)

    def __repr__(self) -> str:
        return (
            f"<InteractionContext /{self.command_name} guild={self.guild_id} "
            f"state={self._state.value}>"
        )
