"""Builds the uniform result messages shown for commands and playback notices.

Everything here is pure: functions take domain values and return a
:class:`RenderedMessage`; :func:`to_embed` is the only place that touches
``discord.Embed``.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

import discord
from pydantic import BaseModel, ConfigDict

from discord_music_bridge.domain.playback.models import (
    Lyrics,
    NowPlaying,
    QueueSnapshot,
    Track,
    format_duration_ms,
)
from discord_music_bridge.domain.shared.messages import DiscordUIMessages, EmojiConstants
from discord_music_bridge.utils.reply import join_within_budget, progress_bar, truncate

BRAND_COLOR = 0x5865F2
SUCCESS_COLOR = 0x57F287
NOTICE_COLOR = 0x99AAB5
ERROR_COLOR = 0xED4245

LYRICS_MAX_CHARS = 4000


class EmbedField(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    value: str
    inline: bool = True


class RenderedMessage(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str | None = None
    description: str | None = None
    color: int = BRAND_COLOR
    fields: tuple[EmbedField, ...] = ()
    thumbnail_url: str | None = None
    footer: str | None = None


def render(
    title: str | None,
    description: str | None = None,
    *,
    color: int | None = None,
    fields: Iterable[EmbedField] | None = None,
    thumbnail_url: str | None = None,
    footer: str | None = None,
) -> RenderedMessage:
    return RenderedMessage(
        title=title,
        description=description,
        color=BRAND_COLOR if color is None else color,
        fields=tuple(fields or ()),
        thumbnail_url=thumbnail_url,
        footer=footer,
    )


def render_error(description: str) -> RenderedMessage:
    return render(DiscordUIMessages.EMBED_ERROR, description, color=ERROR_COLOR)


def render_notice(description: str) -> RenderedMessage:
    """Neutral message for degenerate outcomes such as an empty queue."""
    return render(DiscordUIMessages.EMBED_NOTICE, description, color=NOTICE_COLOR)


def render_success(description: str, *, title: str | None = None) -> RenderedMessage:
    return render(title, description, color=SUCCESS_COLOR)


def to_embed(message: RenderedMessage) -> discord.Embed:
    embed = discord.Embed(
        title=message.title,
        description=message.description,
        color=message.color,
    )
    for f in message.fields:
        embed.add_field(name=f.name, value=f.value, inline=f.inline)
    if message.thumbnail_url:
        embed.set_thumbnail(url=message.thumbnail_url)
    if message.footer:
        embed.set_footer(text=message.footer)
    return embed


# ─────────────────────────────────────────────────────────────────
# Track rendering
# ─────────────────────────────────────────────────────────────────


def _track_link(track: Track) -> str:
    title = truncate(track.title)
    return f"[{title}]({track.url})" if track.url else title


def _track_line(index: int, track: Track) -> str:
    return f"`{index}.` {_track_link(track)} · {track.artist} `[{track.duration_formatted}]`"


def _track_fields(track: Track) -> list[EmbedField]:
    fields = [
        EmbedField(name="Artist", value=track.artist),
        EmbedField(name="Duration", value=track.duration_formatted),
        EmbedField(name="Source", value=track.source.value.capitalize()),
    ]
    if track.requester_name:
        fields.append(EmbedField(name="Requested by", value=track.requester_name))
    return fields


def render_track_started(track: Track) -> RenderedMessage:
    return render(
        DiscordUIMessages.EMBED_NOW_PLAYING,
        f"**{_track_link(track)}**",
        fields=_track_fields(track),
        thumbnail_url=track.thumbnail_url,
    )


def render_track_queued(track: Track) -> RenderedMessage:
    return render(
        DiscordUIMessages.ACTION_TRACK_QUEUED,
        f"**{_track_link(track)}**",
        color=SUCCESS_COLOR,
        fields=_track_fields(track),
        thumbnail_url=track.thumbnail_url,
    )


def render_track_added(track: Track, position: int) -> RenderedMessage:
    return render(
        DiscordUIMessages.EMBED_TRACK_ADDED,
        f"**{_track_link(track)}**",
        color=SUCCESS_COLOR,
        thumbnail_url=track.thumbnail_url,
        footer=DiscordUIMessages.EVENT_TRACK_ADDED.format(position=position),
    )


def render_track_error(track: Track, error: str) -> RenderedMessage:
    return render(
        DiscordUIMessages.EMBED_TRACK_ERROR,
        DiscordUIMessages.EVENT_TRACK_ERROR.format(track_title=truncate(track.title)),
        color=ERROR_COLOR,
        footer=truncate(error, 200) if error else None,
    )


def render_now_playing(now_playing: NowPlaying) -> RenderedMessage:
    track = now_playing.track
    icon = EmojiConstants.PAUSE if now_playing.paused else EmojiConstants.PLAY
    position = format_duration_ms(now_playing.position_ms)
    bar = progress_bar(now_playing.progress)
    description = (
        f"**{_track_link(track)}**\n\n"
        f"{icon} {bar} `{position} / {track.duration_formatted}`"
    )
    return render(
        DiscordUIMessages.EMBED_NOW_PLAYING,
        description,
        fields=_track_fields(track),
        thumbnail_url=track.thumbnail_url,
    )


def render_queue(snapshot: QueueSnapshot) -> RenderedMessage:
    lines = [_track_line(i, t) for i, t in enumerate(snapshot.tracks, start=1)]
    body = join_within_budget(lines) if lines else DiscordUIMessages.STATE_QUEUE_EMPTY

    fields: list[EmbedField] = []
    if snapshot.current is not None:
        fields.append(
            EmbedField(
                name=f"{EmojiConstants.MUSIC_NOTE} Now Playing",
                value=f"{_track_link(snapshot.current)} `[{snapshot.current.duration_formatted}]`",
                inline=False,
            )
        )

    footer = (
        f"{snapshot.size} tracks · {format_duration_ms(snapshot.total_duration_ms)}"
        f" · Loop: {snapshot.loop_mode.label} · Volume: {snapshot.volume}%"
    )
    return render(DiscordUIMessages.EMBED_QUEUE, body, fields=fields, footer=footer)


def render_search_results(query: str, tracks: Sequence[Track]) -> RenderedMessage:
    lines = [_track_line(i, t) for i, t in enumerate(tracks, start=1)]
    return render(
        DiscordUIMessages.EMBED_SEARCH_RESULTS,
        join_within_budget(lines),
        footer=truncate(query, 100),
    )


def render_related(seed: Track, added: Sequence[Track]) -> RenderedMessage:
    lines = [_track_line(i, t) for i, t in enumerate(added, start=1)]
    header = DiscordUIMessages.ACTION_RELATED_ADDED.format(
        count=len(added), seed_title=truncate(seed.title)
    )
    return render(
        DiscordUIMessages.EMBED_RELATED,
        f"{header}\n\n{join_within_budget(lines)}",
        color=SUCCESS_COLOR,
    )


def render_lyrics(lyrics: Lyrics) -> RenderedMessage:
    text = lyrics.text
    if len(text) > LYRICS_MAX_CHARS:
        text = text[:LYRICS_MAX_CHARS].rstrip() + "…"
        if lyrics.url:
            text += "\n\n" + DiscordUIMessages.LYRICS_VIEW_FULL.format(url=lyrics.url)
    return render(
        DiscordUIMessages.EMBED_LYRICS.format(title=truncate(lyrics.title, 200)),
        text,
        footer=lyrics.artist or None,
    )
