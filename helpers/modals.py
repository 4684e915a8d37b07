import discord
from discord.ui import Modal, TextInput

from helpers.discord_reply import respond
from helpers.embeds import create_training_result_embed
from services.training_results import TrainingResultFlow
from utils.log_context import get_interaction_extra
from utils.logging import get_logger

logger = get_logger(__name__)

NO_DRAFT_MESSAGE = (
    "No pending training result found. Run /trainingresults again to start over."
)


class TrainingNotesModal(Modal, title="Training Results"):
    """
    Second step of the training result wizard: free-text evaluator notes.
    """

    notes = TextInput(
        label="Notes",
        style=discord.TextStyle.paragraph,
        placeholder="Strengths, mistakes, what to work on before the next attempt...",
        required=False,
        max_length=1000,
    )

    def __init__(self, flow: TrainingResultFlow, trainee: discord.abc.User) -> None:
        super().__init__(timeout=None)
        self.flow = flow
        self.trainee = trainee

    async def on_submit(self, interaction: discord.Interaction) -> None:
        result = self.flow.submit(interaction.user.id, self.notes.value or "")
        if result is None:
            await respond(interaction, NO_DRAFT_MESSAGE, ephemeral=True)
            return

        embed = create_training_result_embed(result)
        await respond(
            interaction,
            self.trainee.mention,
            embed=embed,
            ephemeral=False,
        )

        try:
            await self.trainee.send(embed=embed)
        except discord.HTTPException as e:
            # Trainees with closed DMs still get the channel post
            logger.info(
                f"Could not DM training result: {e}",
                extra=get_interaction_extra(interaction, trainee_id=str(self.trainee.id)),
            )

        logger.info(
            "Training result delivered",
            extra=get_interaction_extra(interaction, trainee_id=str(self.trainee.id)),
        )
