"""Telegram command handlers.

Every command runs as a short linear pipeline: parse the arguments, validate
them, call the database or the text-generation API, then reply. Input errors
stop the pipeline before any external call. Gateway errors are logged where
they happen and answered with a generic "try again later" reply. Broadcast
commands hand their recipient list to the :class:`MentionDispatcher`.

Handlers receive their collaborators through :class:`CommandHandlers` so that
tests can substitute fakes.
"""

import logging
from collections.abc import Awaitable, Callable
from functools import partial

from telegram import Message, Update, User
from telegram.constants import ChatMemberStatus, ChatType, ParseMode
from telegram.error import TelegramError
from telegram.ext import Application, CommandHandler, ContextTypes

from ..errors import ArityError, AuthorizationError, GatewayError, InputError, StoreError
from ..models import ExplanationRecord
from ..services.directory import MemberDirectory
from ..services.explanation import ExplanationClient, build_prompt
from .dispatcher import MentionDispatcher
from .formatting import (
    MemberTable,
    escape,
    format_explanation,
    member_mention,
    truncate_words,
    user_mention,
)
from .messages import (
    ADD_USAGE,
    ALERT_CAPTION,
    ALERT_DENIED,
    ALERT_MENTION_LABEL,
    ALERT_USAGE,
    EXPLAIN_USAGE,
    LIST_CAPTION,
    MEMBER_ADDED,
    NO_EXPLANATION,
    NO_MEMBERS,
    NO_MEMBERS_IN_CLASS,
    NO_RECIPIENTS,
    START_MESSAGE,
    TAG_CAPTION,
    TAG_USAGE,
    UNEXPECTED_ERROR,
)
from .parsing import parse_fixed, parse_topic_and_limit
from .validation import validate_class_name, validate_explain_request, validate_member

logger = logging.getLogger(__name__)

ALERT_KEYWORD = "everyone"
ADMIN_STATUSES = (ChatMemberStatus.ADMINISTRATOR, ChatMemberStatus.OWNER)

Pipeline = Callable[[Update, ContextTypes.DEFAULT_TYPE, Message, User], Awaitable[None]]


class CommandHandlers:
    """Command pipelines bound to their gateways.

    Args:
        directory: Member, explanation and roster storage.
        explainer: Chat-completion client.
        dispatcher: Batched sender for mention lists and tables.
    """

    def __init__(
        self,
        directory: MemberDirectory,
        explainer: ExplanationClient,
        dispatcher: MentionDispatcher,
    ):
        self.directory = directory
        self.explainer = explainer
        self.dispatcher = dispatcher

    # === ENTRY POINTS ===

    async def start(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        """Handle /start and /help with the command guide."""
        if update.effective_message:
            await update.effective_message.reply_text(START_MESSAGE, parse_mode=ParseMode.MARKDOWN)

    async def add(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        """Handle /add <first_name> <class> <age>."""
        await self._run("add", update, context, self._add)

    async def tag(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        """Handle /tag <class>."""
        await self._run("tag", update, context, self._tag)

    async def list_members(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        """Handle /list."""
        await self._run("list", update, context, self._list)

    async def explain(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        """Handle /explain <topic...> <word_limit>."""
        await self._run("explain", update, context, self._explain)

    async def alert(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        """Handle /alert everyone (chat admins only)."""
        await self._run("alert", update, context, self._alert)

    async def on_error(self, update: object, context: ContextTypes.DEFAULT_TYPE) -> None:
        """Log errors raised outside the command pipelines."""
        logger.error("Unhandled error while processing update", exc_info=context.error)

    # === PIPELINE ===

    async def _run(
        self,
        command: str,
        update: Update,
        context: ContextTypes.DEFAULT_TYPE,
        pipeline: Pipeline,
    ) -> None:
        message = update.effective_message
        user = update.effective_user
        if message is None or user is None:
            return

        user_id = user.id
        logger.info(f"/{command} from user {user_id} in chat {message.chat_id}")

        try:
            await pipeline(update, context, message, user)

        except InputError as e:
            logger.info(f"/{command} rejected for user {user_id}: {type(e).__name__}")
            await message.reply_text(e.user_message, parse_mode=ParseMode.MARKDOWN)

        except AuthorizationError as e:
            logger.warning(f"/{command} denied for user {user_id} in chat {message.chat_id}")
            await message.reply_text(e.user_message)

        except GatewayError as e:
            logger.error(f"/{command} failed for user {user_id}: {type(e).__name__}")
            await message.reply_text(e.user_message)

        except Exception:
            logger.exception(f"Unexpected error in /{command}")
            await message.reply_text(UNEXPECTED_ERROR)

    @staticmethod
    def _scope_id(update: Update) -> int | None:
        return update.effective_chat.id if update.effective_chat else None

    @staticmethod
    def _markdown_sender(message: Message) -> Callable[[str], Awaitable[Message]]:
        return partial(message.reply_text, parse_mode=ParseMode.MARKDOWN)

    # === COMMANDS ===

    async def _add(
        self,
        update: Update,
        context: ContextTypes.DEFAULT_TYPE,
        message: Message,
        user: User,
    ) -> None:
        first_name, class_name, age = parse_fixed(message.text, 3, ADD_USAGE)
        fields = validate_member(first_name, class_name, age)

        member = await self.directory.add_member(
            first_name=fields.first_name,
            class_name=fields.class_name,
            age=fields.age,
            added_by=user.id,
            scope_id=self._scope_id(update),
        )

        await message.reply_text(
            MEMBER_ADDED.format(
                id=member.id,
                first_name=member.first_name,
                class_name=escape(member.class_name),
                age=member.age,
                added_by=escape(user.first_name),
            ),
            parse_mode=ParseMode.MARKDOWN,
        )

    async def _tag(
        self,
        update: Update,
        context: ContextTypes.DEFAULT_TYPE,
        message: Message,
        user: User,
    ) -> None:
        (raw_class,) = parse_fixed(message.text, 1, TAG_USAGE)
        class_name = validate_class_name(raw_class)

        members = await self.directory.members_in_class(class_name, self._scope_id(update))
        if not members:
            await message.reply_text(NO_MEMBERS_IN_CLASS.format(class_name=class_name))
            return

        report = await self.dispatcher.dispatch(
            self._markdown_sender(message),
            TAG_CAPTION.format(class_name=escape(class_name)),
            [member_mention(member) for member in members],
        )
        logger.info(
            f"Tagged {len(members)} members of {class_name} in "
            f"{report.sent}/{report.total_batches} messages"
        )

    async def _list(
        self,
        update: Update,
        context: ContextTypes.DEFAULT_TYPE,
        message: Message,
        user: User,
    ) -> None:
        members = await self.directory.list_members(self._scope_id(update))
        if not members:
            await message.reply_text(NO_MEMBERS)
            return

        table = MemberTable(members)
        await self.dispatcher.dispatch(
            self._markdown_sender(message), LIST_CAPTION, table.rows(), formatter=table.render
        )

    async def _explain(
        self,
        update: Update,
        context: ContextTypes.DEFAULT_TYPE,
        message: Message,
        user: User,
    ) -> None:
        raw = parse_topic_and_limit(message.text, EXPLAIN_USAGE)
        request = validate_explain_request(raw.topic, raw.word_limit)

        prompt = build_prompt(request.topic, request.word_limit)
        max_tokens = self.explainer.max_output_tokens(request.word_limit)
        generated = await self.explainer.generate(prompt, max_tokens)
        explanation = truncate_words(generated, request.word_limit) or NO_EXPLANATION

        try:
            await self.directory.save_explanation(
                ExplanationRecord(
                    topic=request.topic,
                    word_limit=request.word_limit,
                    user_id=user.id,
                    scope_id=self._scope_id(update),
                    response=explanation,
                )
            )
        except StoreError as e:
            logger.warning(f"Explanation for {request.topic!r} was not saved: {e}")

        await message.reply_text(
            format_explanation(request.topic, request.word_limit, explanation)
        )

    async def _alert(
        self,
        update: Update,
        context: ContextTypes.DEFAULT_TYPE,
        message: Message,
        user: User,
    ) -> None:
        (keyword,) = parse_fixed(message.text, 1, ALERT_USAGE)
        if keyword != ALERT_KEYWORD:
            raise ArityError(ALERT_USAGE)

        if not await self._is_chat_admin(update, context):
            raise AuthorizationError(ALERT_DENIED)

        chat_id = message.chat_id
        roster = await self.directory.roster(chat_id)
        if not roster:
            await message.reply_text(NO_RECIPIENTS)
            return

        report = await self.dispatcher.dispatch(
            self._markdown_sender(message),
            ALERT_CAPTION,
            [user_mention(entry.user_id, ALERT_MENTION_LABEL) for entry in roster],
        )
        logger.info(
            f"Alerted {len(roster)} roster members in chat {chat_id} "
            f"with {report.sent}/{report.total_batches} messages"
        )

    # === HELPER FUNCTIONS ===

    async def _is_chat_admin(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> bool:
        """Check that the issuer is an administrator or the owner of the group.

        Args:
            update: Telegram update object.
            context: Bot context used to query the member status.

        Returns:
            True if the user holds an elevated role in the current chat.
        """
        chat = update.effective_chat
        user = update.effective_user
        if chat is None or user is None or chat.type == ChatType.PRIVATE:
            return False

        try:
            member = await context.bot.get_chat_member(chat.id, user.id)
        except TelegramError as e:
            logger.warning(f"Could not read member status of {user.id} in {chat.id}: {e}")
            return False

        return member.status in ADMIN_STATUSES


def register_handlers(application: Application, handlers: CommandHandlers) -> None:
    """Attach every command to ``application``."""
    application.add_handler(CommandHandler(["start", "help"], handlers.start))
    application.add_handler(CommandHandler("add", handlers.add))
    application.add_handler(CommandHandler("tag", handlers.tag))
    application.add_handler(CommandHandler("list", handlers.list_members))
    application.add_handler(CommandHandler("explain", handlers.explain))
    application.add_handler(CommandHandler("alert", handlers.alert))
    application.add_error_handler(handlers.on_error)
