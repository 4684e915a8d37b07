"""
Embed Helper Module

Provides utility functions for creating Discord embeds with consistent
styling for the FBI bot.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import discord

from services.training_results import TrainingStatus
from utils.logging import get_logger

if TYPE_CHECKING:
    from services.training_results import TrainingResult

logger = get_logger(__name__)

FBI_BLUE = 0x1F3A93

STATUS_COLORS = {
    TrainingStatus.PASS: 0x2ECC71,  # Green
    TrainingStatus.FAIL: 0xE74C3C,  # Red
    TrainingStatus.ON_HOLD: 0xF1C40F,  # Yellow
    TrainingStatus.PARTIAL_RETAKE: 0xE67E22,  # Orange
}

STATUS_EMOJI = {
    TrainingStatus.PASS: "✅",
    TrainingStatus.FAIL: "❌",
    TrainingStatus.ON_HOLD: "⏸️",
    TrainingStatus.PARTIAL_RETAKE: "🔁",
}


def create_embed(
    title: str,
    description: str,
    color: int = FBI_BLUE,
) -> discord.Embed:
    """
    Creates a Discord embed with the given parameters.

    Args:
        title (str): The title of the embed.
        description (str): The description/content of the embed.
        color (int, optional): The color of the embed in hexadecimal.

    Returns:
        discord.Embed: The created embed object.
    """
    return discord.Embed(title=title, description=description, color=color)


def create_training_result_embed(result: TrainingResult) -> discord.Embed:
    """
    Build the FBI BFTC training result card addressed to the trainee.

    Args:
        result: The finalized training result.

    Returns:
        discord.Embed: The result embed.
    """
    status = result.status
    embed = create_embed(
        title=f"{STATUS_EMOJI[status]} FBI BFTC Training Results",
        description=f"<@{result.trainee_id}>, your training evaluation has been recorded.",
        color=STATUS_COLORS[status],
    )
    embed.add_field(name="Result", value=f"**{status.label}**", inline=True)
    embed.add_field(name="Evaluator", value=f"<@{result.evaluator_id}>", inline=True)
    if status is TrainingStatus.FAIL:
        embed.add_field(name="Recorded Fails", value=str(result.fail_count), inline=True)
    embed.add_field(
        name="Notes",
        value=(result.notes or "*No notes provided.*")[:1024],
        inline=False,
    )
    embed.set_footer(text="Federal Bureau of Investigation • Training Division")
    return embed
