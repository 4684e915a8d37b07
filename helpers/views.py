# helpers/views.py
"""
Interactive Views Module

Buttons and selects used by the broadcast confirmation gate and the
training result wizard.
"""

import discord
from discord import Interaction, SelectOption
from discord.ui import Button, Select, View

from helpers.discord_reply import respond
from helpers.modals import TrainingNotesModal
from services.confirmation_gate import (
    CANCEL_PREFIX,
    CONFIRM_PREFIX,
    ConfirmationGate,
    GateResult,
)
from services.training_results import TrainingResultFlow, TrainingStatus
from utils.log_context import get_interaction_extra
from utils.logging import get_logger

logger = get_logger(__name__)

INVALID_CONFIRMATION_MESSAGE = "Confirmation expired or invalid."
NOT_REQUESTER_MESSAGE = "You cannot confirm this action."
LARGE_PING_WARNING = "⚠️ Your message pings 5 or more roles. Please confirm sending."

# -------------------------
# Broadcast confirmation
# -------------------------


class ConfirmBroadcastView(View):
    """
    Confirm / Cancel buttons for a parked broadcast.

    Pending confirmations are not persisted, so this view is not registered
    as a persistent view and dies with the process.
    """

    def __init__(self, gate: ConfirmationGate, token: str) -> None:
        super().__init__(timeout=None)
        self.gate = gate
        self.token = token

        self.confirm_button = Button(
            label="Confirm",
            style=discord.ButtonStyle.success,
            custom_id=f"{CONFIRM_PREFIX}{token}",
        )
        self.confirm_button.callback = self.confirm_button_callback
        self.add_item(self.confirm_button)

        self.cancel_button = Button(
            label="Cancel",
            style=discord.ButtonStyle.danger,
            custom_id=f"{CANCEL_PREFIX}{token}",
        )
        self.cancel_button.callback = self.cancel_button_callback
        self.add_item(self.cancel_button)

    async def confirm_button_callback(self, interaction: Interaction) -> None:
        outcome = await self.gate.confirm(self.token, interaction.user.id)

        if outcome.result is GateResult.REJECTED:
            await respond(interaction, NOT_REQUESTER_MESSAGE, ephemeral=True)
            return
        if outcome.result is not GateResult.CONFIRMED:
            await respond(interaction, INVALID_CONFIRMATION_MESSAGE, ephemeral=True)
            return

        self.stop()
        await respond(interaction, "Message sent!", ephemeral=True)
        if outcome.repeat is not None:
            await respond(
                interaction,
                f"Repeating every {outcome.repeat.interval_minutes} min.\n"
                f"Repeat ID: {outcome.repeat.id}",
                ephemeral=True,
            )
        logger.info(
            "Large broadcast confirmed",
            extra=get_interaction_extra(interaction, confirm_token=self.token),
        )

    async def cancel_button_callback(self, interaction: Interaction) -> None:
        outcome = self.gate.cancel(self.token, interaction.user.id)

        if outcome.result is GateResult.REJECTED:
            await respond(interaction, "You cannot cancel this action.", ephemeral=True)
            return
        if outcome.result is not GateResult.CANCELED:
            await respond(interaction, INVALID_CONFIRMATION_MESSAGE, ephemeral=True)
            return

        self.stop()
        await respond(interaction, "Message sending canceled.", ephemeral=True)


# -------------------------
# Training results wizard
# -------------------------


class TrainingStatusView(View):
    """
    First step of the training result wizard: pick the outcome.

    Selecting a status stores it on the evaluator's draft and opens the
    notes modal.
    """

    def __init__(
        self,
        flow: TrainingResultFlow,
        evaluator_id: int,
        trainee: discord.abc.User,
    ) -> None:
        # Temporary helper view -> finite timeout
        super().__init__(timeout=600)
        self.flow = flow
        self.evaluator_id = evaluator_id
        self.trainee = trainee

        self.status_select = Select(
            placeholder="Select the training result",
            options=[
                SelectOption(label=status.label, value=status.value)
                for status in TrainingStatus
            ],
            min_values=1,
            max_values=1,
        )
        self.status_select.callback = self.status_select_callback
        self.add_item(self.status_select)

    async def interaction_check(self, interaction: Interaction) -> bool:
        if interaction.user.id != self.evaluator_id:
            await respond(
                interaction,
                "Only the evaluator who started this can choose the result.",
                ephemeral=True,
            )
            return False
        return True

    async def status_select_callback(self, interaction: Interaction) -> None:
        status = TrainingStatus(self.status_select.values[0])
        if not self.flow.select_status(interaction.user.id, status):
            await respond(
                interaction,
                "No pending training result found. Run /trainingresults again.",
                ephemeral=True,
            )
            return

        await interaction.response.send_modal(TrainingNotesModal(self.flow, self.trainee))
