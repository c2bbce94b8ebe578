"""Encode and decode Mastodon entities to and from JSON values.

Decoders take the value produced by ``json.loads`` and either return a model
or raise ``DecodeError``. Required fields must be present; optional fields
that older servers leave out decode to a default (False, [], or None).

Some servers send counts as strings and others as numbers, so count fields
accept both and come out as ``int``. Enumerated strings the client doesn't
know decode to ``Unknown(value)`` instead of failing the whole entity.

Encoders go the other way. An entity decoded from the wire is re-emitted as
the exact JSON it came from (its ``raw`` field), so undocumented fields
survive a round trip. Locally built entities are encoded from their fields.

``decode_entity`` turns an arbitrary response into whichever Entity it is,
trying decoders in the order given by ``DECODE_PRIORITY``.
"""

import functools
import logging
from typing import Any, Callable

from .errors import DecodeError
from .models import (
    Account,
    AccountEntity,
    AccountListEntity,
    Activity,
    ActivityListEntity,
    App,
    AppEntity,
    Application,
    ApplicationEntity,
    Attachment,
    AttachmentEntity,
    AttachmentType,
    AudioMeta,
    Card,
    CardEntity,
    CardType,
    Context,
    ContextEntity,
    Conversation,
    ConversationEntity,
    ConversationListEntity,
    Emoji,
    EmojiListEntity,
    Entity,
    Error,
    ErrorEntity,
    Field,
    Filter,
    FilterContext,
    FilterEntity,
    FilterListEntity,
    Focus,
    Group,
    GroupEntity,
    GroupListEntity,
    GroupRelationship,
    GroupRelationshipEntity,
    GroupRelationshipListEntity,
    History,
    ImageMeta,
    Instance,
    InstanceEntity,
    ListInfo,
    ListInfoEntity,
    ListInfoListEntity,
    Mention,
    Meta,
    MetaInfo,
    NoEntity,
    Notification,
    NotificationEntity,
    NotificationListEntity,
    NotificationType,
    Poll,
    PollEntity,
    PollOption,
    Privacy,
    Relationship,
    RelationshipEntity,
    RelationshipListEntity,
    Results,
    ResultsEntity,
    ScheduledStatus,
    ScheduledStatusEntity,
    ScheduledStatusListEntity,
    Source,
    Stats,
    Status,
    StatusEntity,
    StatusListEntity,
    StatusParams,
    StringListEntity,
    Tag,
    TagListEntity,
    Unknown,
    UnknownMeta,
    Urls,
    ValueEntity,
    VideoMeta,
    Visibility,
    WrappedAccount,
    WrappedStatus,
)

logger = logging.getLogger(__name__)

# How many levels of reblog/quote (or moved-to account) nesting are decoded.
# Anything deeper is dropped; the API never nests that far in practice.
MAX_EMBED_DEPTH = 2


# ── Primitive decoders ──


def _kind(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "a boolean"
    if isinstance(value, (int, float)):
        return "a number"
    if isinstance(value, str):
        return "a string"
    if isinstance(value, list):
        return "an array"
    return "an object"


def _object(value: Any) -> dict:
    if not isinstance(value, dict):
        raise DecodeError(f"expected an object, got {_kind(value)}")
    return value


def _str(value: Any) -> str:
    if not isinstance(value, str):
        raise DecodeError(f"expected a string, got {_kind(value)}")
    return value


def _bool(value: Any) -> bool:
    if not isinstance(value, bool):
        raise DecodeError(f"expected a boolean, got {_kind(value)}")
    return value


def _int(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise DecodeError(f"expected an integer, got {_kind(value)}")
    return value


def _float(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise DecodeError(f"expected a number, got {_kind(value)}")
    return float(value)


def _int_or_str(value: Any) -> int:
    """Accept 42, 42.0 or "42" and return 42."""
    if isinstance(value, bool):
        raise DecodeError("expected an integer, got a boolean")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            raise DecodeError(f"expected an integer string, got {value!r}") from None
    raise DecodeError(f"expected an integer or a string, got {_kind(value)}")


def _id(value: Any) -> str:
    # Old Pleroma and pre-2.0 Mastodon send numeric IDs
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return _str(value)


def _list(decode: Callable[[Any], Any]) -> Callable[[Any], list]:
    def decode_list(value: Any) -> list:
        if not isinstance(value, list):
            raise DecodeError(f"expected an array, got {_kind(value)}")
        items = []
        for index, item in enumerate(value):
            try:
                items.append(decode(item))
            except DecodeError as e:
                raise e.at(index) from None
        return items

    return decode_list


def _enum(table) -> Callable[[Any], Any]:
    def decode_enum(value: Any):
        text = _str(value)
        try:
            return table(text)
        except ValueError:
            logger.debug("Unrecognised %s %r", table.__name__, text)
            return Unknown(text)

    return decode_enum


def _required(obj: dict, key: str, decode: Callable[[Any], Any]):
    if obj.get(key) is None:
        raise DecodeError("missing required field", [key])
    try:
        return decode(obj[key])
    except DecodeError as e:
        raise e.at(key) from None


def _optional(obj: dict, key: str, decode: Callable[[Any], Any], default=None):
    value = obj.get(key)
    if value is None:
        return default
    try:
        return decode(value)
    except DecodeError as e:
        raise e.at(key) from None


# ── Primitive encoders ──


def _passthrough(encode):
    """Emit an entity's stored wire value instead of re-encoding it."""

    @functools.wraps(encode)
    def wrapper(entity):
        if entity.raw is not None:
            return entity.raw
        return encode(entity)

    return wrapper


def _maybe(value, encode):
    return None if value is None else encode(value)


def _enum_value(value) -> str:
    return value.value


def encode_list(items: list, encode: Callable[[Any], Any]) -> list:
    return [encode(item) for item in items]


# ── Accounts ──


def decode_emoji(value: Any) -> Emoji:
    obj = _object(value)
    return Emoji(
        shortcode=_required(obj, "shortcode", _str),
        url=_required(obj, "url", _str),
        static_url=_required(obj, "static_url", _str),
        visible_in_picker=_optional(obj, "visible_in_picker", _bool, False),
        raw=value,
    )


@_passthrough
def encode_emoji(emoji: Emoji) -> dict:
    return {
        "shortcode": emoji.shortcode,
        "url": emoji.url,
        "static_url": emoji.static_url,
        "visible_in_picker": emoji.visible_in_picker,
    }


def decode_field(value: Any) -> Field:
    obj = _object(value)
    return Field(
        name=_required(obj, "name", _str),
        value=_required(obj, "value", _str),
        verified_at=_optional(obj, "verified_at", _str),
        raw=value,
    )


@_passthrough
def encode_field(item: Field) -> dict:
    return {"name": item.name, "value": item.value, "verified_at": item.verified_at}


def decode_source(value: Any) -> Source:
    obj = _object(value)
    return Source(
        note=_optional(obj, "note", _str, ""),
        privacy=_optional(obj, "privacy", _enum(Privacy)),
        sensitive=_optional(obj, "sensitive", _bool, False),
        language=_optional(obj, "language", _str),
        fields=_optional(obj, "fields", _list(decode_field), []),
        raw=value,
    )


@_passthrough
def encode_source(source: Source) -> dict:
    return {
        "note": source.note,
        "privacy": _maybe(source.privacy, _enum_value),
        "sensitive": source.sensitive,
        "language": source.language,
        "fields": encode_list(source.fields, encode_field),
    }


def decode_account(value: Any, depth: int = 0) -> Account:
    """Decode an Account, following ``moved`` up to MAX_EMBED_DEPTH levels."""
    obj = _object(value)
    return Account(
        id=_required(obj, "id", _id),
        username=_required(obj, "username", _str),
        acct=_required(obj, "acct", _str),
        display_name=_required(obj, "display_name", _str),
        created_at=_required(obj, "created_at", _str),
        url=_required(obj, "url", _str),
        avatar=_required(obj, "avatar", _str),
        header=_required(obj, "header", _str),
        note=_optional(obj, "note", _str, ""),
        avatar_static=_optional(obj, "avatar_static", _str, ""),
        header_static=_optional(obj, "header_static", _str, ""),
        locked=_optional(obj, "locked", _bool, False),
        bot=_optional(obj, "bot", _bool, False),
        group=_optional(obj, "group", _bool, False),
        discoverable=_optional(obj, "discoverable", _bool, False),
        followers_count=_optional(obj, "followers_count", _int_or_str, 0),
        following_count=_optional(obj, "following_count", _int_or_str, 0),
        statuses_count=_optional(obj, "statuses_count", _int_or_str, 0),
        emojis=_optional(obj, "emojis", _list(decode_emoji), []),
        fields=_optional(obj, "fields", _list(decode_field), []),
        moved=_embedded(
            obj,
            "moved",
            depth,
            lambda v: WrappedAccount(decode_account(v, depth + 1)),
        ),
        source=_optional(obj, "source", decode_source),
        raw=value,
    )


@_passthrough
def encode_account(account: Account) -> dict:
    return {
        "id": account.id,
        "username": account.username,
        "acct": account.acct,
        "display_name": account.display_name,
        "created_at": account.created_at,
        "url": account.url,
        "avatar": account.avatar,
        "header": account.header,
        "note": account.note,
        "avatar_static": account.avatar_static,
        "header_static": account.header_static,
        "locked": account.locked,
        "bot": account.bot,
        "group": account.group,
        "discoverable": account.discoverable,
        "followers_count": account.followers_count,
        "following_count": account.following_count,
        "statuses_count": account.statuses_count,
        "emojis": encode_list(account.emojis, encode_emoji),
        "fields": encode_list(account.fields, encode_field),
        "moved": _maybe(account.moved, lambda w: encode_account(w.account)),
        "source": _maybe(account.source, encode_source),
    }


def decode_relationship(value: Any) -> Relationship:
    obj = _object(value)
    return Relationship(
        id=_required(obj, "id", _id),
        following=_required(obj, "following", _bool),
        followed_by=_required(obj, "followed_by", _bool),
        blocking=_required(obj, "blocking", _bool),
        muting=_required(obj, "muting", _bool),
        requested=_required(obj, "requested", _bool),
        muting_notifications=_optional(obj, "muting_notifications", _bool, False),
        domain_blocking=_optional(obj, "domain_blocking", _bool, False),
        showing_reblogs=_optional(obj, "showing_reblogs", _bool, False),
        endorsed=_optional(obj, "endorsed", _bool, False),
        raw=value,
    )


@_passthrough
def encode_relationship(relationship: Relationship) -> dict:
    return {
        "id": relationship.id,
        "following": relationship.following,
        "followed_by": relationship.followed_by,
        "blocking": relationship.blocking,
        "muting": relationship.muting,
        "requested": relationship.requested,
        "muting_notifications": relationship.muting_notifications,
        "domain_blocking": relationship.domain_blocking,
        "showing_reblogs": relationship.showing_reblogs,
        "endorsed": relationship.endorsed,
    }


# ── Apps ──


def decode_app(value: Any) -> App:
    obj = _object(value)
    return App(
        client_id=_required(obj, "client_id", _str),
        client_secret=_required(obj, "client_secret", _str),
        id=_optional(obj, "id", _id),
        name=_optional(obj, "name", _str),
        website=_optional(obj, "website", _str),
        redirect_uri=_optional(obj, "redirect_uri", _str),
        vapid_key=_optional(obj, "vapid_key", _str),
        raw=value,
    )


@_passthrough
def encode_app(app: App) -> dict:
    return {
        "client_id": app.client_id,
        "client_secret": app.client_secret,
        "id": app.id,
        "name": app.name,
        "website": app.website,
        "redirect_uri": app.redirect_uri,
        "vapid_key": app.vapid_key,
    }


def decode_application(value: Any) -> Application:
    obj = _object(value)
    return Application(
        name=_required(obj, "name", _str),
        website=_optional(obj, "website", _str),
        raw=value,
    )


@_passthrough
def encode_application(application: Application) -> dict:
    return {"name": application.name, "website": application.website}


# ── Media ──


def decode_focus(value: Any) -> Focus:
    obj = _object(value)
    return Focus(
        x=_required(obj, "x", _float),
        y=_required(obj, "y", _float),
        raw=value,
    )


@_passthrough
def encode_focus(focus: Focus) -> dict:
    return {"x": focus.x, "y": focus.y}


def decode_meta_info(value: Any) -> MetaInfo:
    obj = _object(value)
    return MetaInfo(
        width=_optional(obj, "width", _int),
        height=_optional(obj, "height", _int),
        size=_optional(obj, "size", _str),
        aspect=_optional(obj, "aspect", _float),
        frame_rate=_optional(obj, "frame_rate", _str),
        duration=_optional(obj, "duration", _float),
        bitrate=_optional(obj, "bitrate", _int),
        raw=value,
    )


@_passthrough
def encode_meta_info(info: MetaInfo) -> dict:
    return {
        "width": info.width,
        "height": info.height,
        "size": info.size,
        "aspect": info.aspect,
        "frame_rate": info.frame_rate,
        "duration": info.duration,
        "bitrate": info.bitrate,
    }


def decode_image_meta(value: Any) -> ImageMeta:
    obj = _object(value)
    return ImageMeta(
        original=_optional(obj, "original", decode_meta_info),
        small=_optional(obj, "small", decode_meta_info),
        focus=_optional(obj, "focus", decode_focus),
        raw=value,
    )


def decode_video_meta(value: Any) -> VideoMeta:
    obj = _object(value)
    return VideoMeta(
        original=_optional(obj, "original", decode_meta_info),
        small=_optional(obj, "small", decode_meta_info),
        length=_optional(obj, "length", _str),
        duration=_optional(obj, "duration", _float),
        fps=_optional(obj, "fps", _int),
        audio_encode=_optional(obj, "audio_encode", _str),
        audio_bitrate=_optional(obj, "audio_bitrate", _str),
        audio_channels=_optional(obj, "audio_channels", _str),
        raw=value,
    )


def decode_audio_meta(value: Any) -> AudioMeta:
    obj = _object(value)
    return AudioMeta(
        original=_optional(obj, "original", decode_meta_info),
        length=_optional(obj, "length", _str),
        duration=_optional(obj, "duration", _float),
        audio_encode=_optional(obj, "audio_encode", _str),
        audio_bitrate=_optional(obj, "audio_bitrate", _str),
        audio_channels=_optional(obj, "audio_channels", _str),
        raw=value,
    )


def meta_decoder(kind: AttachmentType | Unknown) -> Callable[[Any], Meta]:
    """Pick the decoder for an attachment's ``meta`` given its ``type``."""
    if kind is AttachmentType.IMAGE:
        return decode_image_meta
    if kind in (AttachmentType.VIDEO, AttachmentType.GIFV):
        return decode_video_meta
    if kind is AttachmentType.AUDIO:
        return decode_audio_meta
    return UnknownMeta


def encode_meta(meta: Meta) -> Any:
    if isinstance(meta, UnknownMeta):
        return meta.value
    if meta.raw is not None:
        return meta.raw
    if isinstance(meta, ImageMeta):
        return {
            "original": _maybe(meta.original, encode_meta_info),
            "small": _maybe(meta.small, encode_meta_info),
            "focus": _maybe(meta.focus, encode_focus),
        }
    encoded = {"original": _maybe(meta.original, encode_meta_info)}
    if isinstance(meta, VideoMeta):
        encoded["small"] = _maybe(meta.small, encode_meta_info)
        encoded["fps"] = meta.fps
    encoded.update(
        length=meta.length,
        duration=meta.duration,
        audio_encode=meta.audio_encode,
        audio_bitrate=meta.audio_bitrate,
        audio_channels=meta.audio_channels,
    )
    return encoded


def decode_attachment(value: Any) -> Attachment:
    obj = _object(value)
    # meta's shape depends on type, so type has to be decoded first
    kind = _required(obj, "type", _enum(AttachmentType))
    return Attachment(
        id=_required(obj, "id", _id),
        type=kind,
        url=_optional(obj, "url", _str),
        preview_url=_optional(obj, "preview_url", _str),
        remote_url=_optional(obj, "remote_url", _str),
        text_url=_optional(obj, "text_url", _str),
        meta=_optional(obj, "meta", meta_decoder(kind)),
        description=_optional(obj, "description", _str),
        blurhash=_optional(obj, "blurhash", _str),
        raw=value,
    )


@_passthrough
def encode_attachment(attachment: Attachment) -> dict:
    return {
        "id": attachment.id,
        "type": attachment.type.value,
        "url": attachment.url,
        "preview_url": attachment.preview_url,
        "remote_url": attachment.remote_url,
        "text_url": attachment.text_url,
        "meta": _maybe(attachment.meta, encode_meta),
        "description": attachment.description,
        "blurhash": attachment.blurhash,
    }


# ── Statuses ──


def decode_mention(value: Any) -> Mention:
    obj = _object(value)
    return Mention(
        id=_required(obj, "id", _id),
        username=_required(obj, "username", _str),
        acct=_required(obj, "acct", _str),
        url=_required(obj, "url", _str),
        raw=value,
    )


@_passthrough
def encode_mention(mention: Mention) -> dict:
    return {
        "id": mention.id,
        "username": mention.username,
        "acct": mention.acct,
        "url": mention.url,
    }


def decode_history(value: Any) -> History:
    obj = _object(value)
    return History(
        day=_required(obj, "day", _int_or_str),
        uses=_required(obj, "uses", _int_or_str),
        accounts=_required(obj, "accounts", _int_or_str),
        raw=value,
    )


@_passthrough
def encode_history(history: History) -> dict:
    return {
        "day": str(history.day),
        "uses": str(history.uses),
        "accounts": str(history.accounts),
    }


def decode_tag(value: Any) -> Tag:
    # v1 search and trends on older servers return bare hashtag names
    if isinstance(value, str):
        return Tag(name=value, url="", raw=value)
    obj = _object(value)
    return Tag(
        name=_required(obj, "name", _str),
        url=_required(obj, "url", _str),
        history=_optional(obj, "history", _list(decode_history), []),
        raw=value,
    )


@_passthrough
def encode_tag(tag: Tag) -> dict:
    return {
        "name": tag.name,
        "url": tag.url,
        "history": encode_list(tag.history, encode_history),
    }


def decode_card(value: Any) -> Card:
    obj = _object(value)
    return Card(
        url=_required(obj, "url", _str),
        title=_required(obj, "title", _str),
        description=_required(obj, "description", _str),
        type=_required(obj, "type", _enum(CardType)),
        image=_optional(obj, "image", _str),
        author_name=_optional(obj, "author_name", _str),
        author_url=_optional(obj, "author_url", _str),
        provider_name=_optional(obj, "provider_name", _str),
        provider_url=_optional(obj, "provider_url", _str),
        html=_optional(obj, "html", _str),
        width=_optional(obj, "width", _int),
        height=_optional(obj, "height", _int),
        raw=value,
    )


@_passthrough
def encode_card(card: Card) -> dict:
    return {
        "url": card.url,
        "title": card.title,
        "description": card.description,
        "type": card.type.value,
        "image": card.image,
        "author_name": card.author_name,
        "author_url": card.author_url,
        "provider_name": card.provider_name,
        "provider_url": card.provider_url,
        "html": card.html,
        "width": card.width,
        "height": card.height,
    }


def decode_poll_option(value: Any) -> PollOption:
    obj = _object(value)
    return PollOption(
        title=_required(obj, "title", _str),
        votes_count=_optional(obj, "votes_count", _int_or_str),
        raw=value,
    )


@_passthrough
def encode_poll_option(option: PollOption) -> dict:
    return {"title": option.title, "votes_count": option.votes_count}


def decode_poll(value: Any) -> Poll:
    obj = _object(value)
    return Poll(
        id=_required(obj, "id", _id),
        options=_required(obj, "options", _list(decode_poll_option)),
        expires_at=_optional(obj, "expires_at", _str),
        expired=_required(obj, "expired", _bool),
        multiple=_required(obj, "multiple", _bool),
        votes_count=_optional(obj, "votes_count", _int_or_str, 0),
        voted=_optional(obj, "voted", _bool, False),
        emojis=_optional(obj, "emojis", _list(decode_emoji), []),
        raw=value,
    )


@_passthrough
def encode_poll(poll: Poll) -> dict:
    return {
        "id": poll.id,
        "options": encode_list(poll.options, encode_poll_option),
        "expires_at": poll.expires_at,
        "expired": poll.expired,
        "multiple": poll.multiple,
        "votes_count": poll.votes_count,
        "voted": poll.voted,
        "emojis": encode_list(poll.emojis, encode_emoji),
    }


def decode_group(value: Any) -> Group:
    obj = _object(value)
    return Group(
        id=_required(obj, "id", _id),
        title=_required(obj, "title", _str),
        description=_required(obj, "description", _str),
        cover_image_url=_optional(obj, "cover_image_url", _str),
        is_archived=_optional(obj, "is_archived", _bool, False),
        member_count=_optional(obj, "member_count", _int_or_str, 0),
        raw=value,
    )


@_passthrough
def encode_group(group: Group) -> dict:
    return {
        "id": group.id,
        "title": group.title,
        "description": group.description,
        "cover_image_url": group.cover_image_url,
        "is_archived": group.is_archived,
        "member_count": group.member_count,
    }


def decode_group_relationship(value: Any) -> GroupRelationship:
    obj = _object(value)
    return GroupRelationship(
        id=_required(obj, "id", _id),
        member=_required(obj, "member", _bool),
        admin=_required(obj, "admin", _bool),
        unread_count=_optional(obj, "unread_count", _int_or_str, 0),
        raw=value,
    )


@_passthrough
def encode_group_relationship(relationship: GroupRelationship) -> dict:
    return {
        "id": relationship.id,
        "member": relationship.member,
        "admin": relationship.admin,
        "unread_count": relationship.unread_count,
    }


def _embedded(obj: dict, key: str, depth: int, decode: Callable[[Any], Any]):
    """Decode a wrapped self-referential field, giving up past MAX_EMBED_DEPTH."""
    if obj.get(key) is None:
        return None
    if depth >= MAX_EMBED_DEPTH:
        logger.warning(
            "Dropping %r embedded %d levels deep (limit %d)",
            key,
            depth + 1,
            MAX_EMBED_DEPTH,
        )
        return None
    return _required(obj, key, decode)


def decode_status(value: Any, depth: int = 0) -> Status:
    """Decode a Status, following reblog/quote up to MAX_EMBED_DEPTH levels."""
    obj = _object(value)
    return Status(
        id=_required(obj, "id", _id),
        uri=_required(obj, "uri", _str),
        created_at=_required(obj, "created_at", _str),
        account=_required(obj, "account", decode_account),
        content=_required(obj, "content", _str),
        visibility=_required(obj, "visibility", _enum(Visibility)),
        url=_optional(obj, "url", _str),
        in_reply_to_id=_optional(obj, "in_reply_to_id", _id),
        in_reply_to_account_id=_optional(obj, "in_reply_to_account_id", _id),
        reblog=_embedded(
            obj,
            "reblog",
            depth,
            lambda v: WrappedStatus(decode_status(v, depth + 1)),
        ),
        quote=_embedded(
            obj,
            "quote",
            depth,
            lambda v: WrappedStatus(decode_status(v, depth + 1)),
        ),
        spoiler_text=_optional(obj, "spoiler_text", _str, ""),
        sensitive=_optional(obj, "sensitive", _bool, False),
        language=_optional(obj, "language", _str),
        replies_count=_optional(obj, "replies_count", _int_or_str, 0),
        reblogs_count=_optional(obj, "reblogs_count", _int_or_str, 0),
        favourites_count=_optional(obj, "favourites_count", _int_or_str, 0),
        reblogged=_optional(obj, "reblogged", _bool, False),
        favourited=_optional(obj, "favourited", _bool, False),
        muted=_optional(obj, "muted", _bool, False),
        pinned=_optional(obj, "pinned", _bool, False),
        media_attachments=_optional(
            obj, "media_attachments", _list(decode_attachment), []
        ),
        mentions=_optional(obj, "mentions", _list(decode_mention), []),
        tags=_optional(obj, "tags", _list(decode_tag), []),
        emojis=_optional(obj, "emojis", _list(decode_emoji), []),
        card=_optional(obj, "card", decode_card),
        poll=_optional(obj, "poll", decode_poll),
        application=_optional(obj, "application", decode_application),
        group=_optional(obj, "group", decode_group),
        raw=value,
    )


@_passthrough
def encode_status(status: Status) -> dict:
    return {
        "id": status.id,
        "uri": status.uri,
        "created_at": status.created_at,
        "account": encode_account(status.account),
        "content": status.content,
        "visibility": status.visibility.value,
        "url": status.url,
        "in_reply_to_id": status.in_reply_to_id,
        "in_reply_to_account_id": status.in_reply_to_account_id,
        "reblog": _maybe(status.reblog, lambda w: encode_status(w.status)),
        "quote": _maybe(status.quote, lambda w: encode_status(w.status)),
        "spoiler_text": status.spoiler_text,
        "sensitive": status.sensitive,
        "language": status.language,
        "replies_count": status.replies_count,
        "reblogs_count": status.reblogs_count,
        "favourites_count": status.favourites_count,
        "reblogged": status.reblogged,
        "favourited": status.favourited,
        "muted": status.muted,
        "pinned": status.pinned,
        "media_attachments": encode_list(status.media_attachments, encode_attachment),
        "mentions": encode_list(status.mentions, encode_mention),
        "tags": encode_list(status.tags, encode_tag),
        "emojis": encode_list(status.emojis, encode_emoji),
        "card": _maybe(status.card, encode_card),
        "poll": _maybe(status.poll, encode_poll),
        "application": _maybe(status.application, encode_application),
        "group": _maybe(status.group, encode_group),
    }


def decode_status_params(value: Any) -> StatusParams:
    obj = _object(value)
    return StatusParams(
        text=_required(obj, "text", _str),
        visibility=_optional(obj, "visibility", _enum(Visibility)),
        in_reply_to_id=_optional(obj, "in_reply_to_id", _id),
        media_ids=_optional(obj, "media_ids", _list(_id), []),
        sensitive=_optional(obj, "sensitive", _bool, False),
        spoiler_text=_optional(obj, "spoiler_text", _str),
        scheduled_at=_optional(obj, "scheduled_at", _str),
        application_id=_optional(obj, "application_id", _id),
        raw=value,
    )


@_passthrough
def encode_status_params(params: StatusParams) -> dict:
    return {
        "text": params.text,
        "visibility": _maybe(params.visibility, _enum_value),
        "in_reply_to_id": params.in_reply_to_id,
        "media_ids": list(params.media_ids),
        "sensitive": params.sensitive,
        "spoiler_text": params.spoiler_text,
        "scheduled_at": params.scheduled_at,
        "application_id": params.application_id,
    }


def decode_scheduled_status(value: Any) -> ScheduledStatus:
    obj = _object(value)
    return ScheduledStatus(
        id=_required(obj, "id", _id),
        scheduled_at=_required(obj, "scheduled_at", _str),
        params=_required(obj, "params", decode_status_params),
        media_attachments=_optional(
            obj, "media_attachments", _list(decode_attachment), []
        ),
        raw=value,
    )


@_passthrough
def encode_scheduled_status(scheduled: ScheduledStatus) -> dict:
    return {
        "id": scheduled.id,
        "scheduled_at": scheduled.scheduled_at,
        "params": encode_status_params(scheduled.params),
        "media_attachments": encode_list(
            scheduled.media_attachments, encode_attachment
        ),
    }


def decode_context(value: Any) -> Context:
    obj = _object(value)
    return Context(
        ancestors=_required(obj, "ancestors", _list(decode_status)),
        descendants=_required(obj, "descendants", _list(decode_status)),
        raw=value,
    )


@_passthrough
def encode_context(context: Context) -> dict:
    return {
        "ancestors": encode_list(context.ancestors, encode_status),
        "descendants": encode_list(context.descendants, encode_status),
    }


def decode_conversation(value: Any) -> Conversation:
    obj = _object(value)
    return Conversation(
        id=_required(obj, "id", _id),
        accounts=_required(obj, "accounts", _list(decode_account)),
        last_status=_optional(obj, "last_status", decode_status),
        unread=_optional(obj, "unread", _bool, False),
        raw=value,
    )


@_passthrough
def encode_conversation(conversation: Conversation) -> dict:
    return {
        "id": conversation.id,
        "accounts": encode_list(conversation.accounts, encode_account),
        "last_status": _maybe(conversation.last_status, encode_status),
        "unread": conversation.unread,
    }


def decode_notification(value: Any) -> Notification:
    obj = _object(value)
    return Notification(
        id=_required(obj, "id", _id),
        type=_required(obj, "type", _enum(NotificationType)),
        created_at=_required(obj, "created_at", _str),
        account=_required(obj, "account", decode_account),
        status=_optional(obj, "status", decode_status),
        raw=value,
    )


@_passthrough
def encode_notification(notification: Notification) -> dict:
    return {
        "id": notification.id,
        "type": notification.type.value,
        "created_at": notification.created_at,
        "account": encode_account(notification.account),
        "status": _maybe(notification.status, encode_status),
    }


# ── Everything else ──


def decode_error(value: Any) -> Error:
    obj = _object(value)
    return Error(
        error=_required(obj, "error", _str),
        error_description=_optional(obj, "error_description", _str),
        raw=value,
    )


@_passthrough
def encode_error(error: Error) -> dict:
    return {"error": error.error, "error_description": error.error_description}


def decode_filter(value: Any) -> Filter:
    obj = _object(value)
    return Filter(
        id=_required(obj, "id", _id),
        phrase=_required(obj, "phrase", _str),
        context=_required(obj, "context", _list(_enum(FilterContext))),
        expires_at=_optional(obj, "expires_at", _str),
        irreversible=_optional(obj, "irreversible", _bool, False),
        whole_word=_optional(obj, "whole_word", _bool, False),
        raw=value,
    )


@_passthrough
def encode_filter(item: Filter) -> dict:
    return {
        "id": item.id,
        "phrase": item.phrase,
        "context": [c.value for c in item.context],
        "expires_at": item.expires_at,
        "irreversible": item.irreversible,
        "whole_word": item.whole_word,
    }


def decode_urls(value: Any) -> Urls:
    obj = _object(value)
    return Urls(streaming_api=_optional(obj, "streaming_api", _str), raw=value)


@_passthrough
def encode_urls(urls: Urls) -> dict:
    return {"streaming_api": urls.streaming_api}


def decode_stats(value: Any) -> Stats:
    obj = _object(value)
    return Stats(
        user_count=_optional(obj, "user_count", _int_or_str, 0),
        status_count=_optional(obj, "status_count", _int_or_str, 0),
        domain_count=_optional(obj, "domain_count", _int_or_str, 0),
        raw=value,
    )


@_passthrough
def encode_stats(stats: Stats) -> dict:
    return {
        "user_count": stats.user_count,
        "status_count": stats.status_count,
        "domain_count": stats.domain_count,
    }


def decode_instance(value: Any) -> Instance:
    obj = _object(value)
    return Instance(
        uri=_required(obj, "uri", _str),
        title=_required(obj, "title", _str),
        description=_required(obj, "description", _str),
        email=_required(obj, "email", _str),
        version=_required(obj, "version", _str),
        thumbnail=_optional(obj, "thumbnail", _str),
        urls=_optional(obj, "urls", decode_urls),
        stats=_optional(obj, "stats", decode_stats),
        languages=_optional(obj, "languages", _list(_str), []),
        contact_account=_optional(obj, "contact_account", decode_account),
        max_toot_chars=_optional(obj, "max_toot_chars", _int_or_str),
        registrations=_optional(obj, "registrations", _bool, False),
        approval_required=_optional(obj, "approval_required", _bool, False),
        raw=value,
    )


@_passthrough
def encode_instance(instance: Instance) -> dict:
    return {
        "uri": instance.uri,
        "title": instance.title,
        "description": instance.description,
        "email": instance.email,
        "version": instance.version,
        "thumbnail": instance.thumbnail,
        "urls": _maybe(instance.urls, encode_urls),
        "stats": _maybe(instance.stats, encode_stats),
        "languages": list(instance.languages),
        "contact_account": _maybe(instance.contact_account, encode_account),
        "max_toot_chars": instance.max_toot_chars,
        "registrations": instance.registrations,
        "approval_required": instance.approval_required,
    }


def decode_activity(value: Any) -> Activity:
    obj = _object(value)
    return Activity(
        week=_required(obj, "week", _int_or_str),
        statuses=_required(obj, "statuses", _int_or_str),
        logins=_required(obj, "logins", _int_or_str),
        registrations=_required(obj, "registrations", _int_or_str),
        raw=value,
    )


@_passthrough
def encode_activity(activity: Activity) -> dict:
    return {
        "week": str(activity.week),
        "statuses": str(activity.statuses),
        "logins": str(activity.logins),
        "registrations": str(activity.registrations),
    }


def decode_list_info(value: Any) -> ListInfo:
    obj = _object(value)
    return ListInfo(
        id=_required(obj, "id", _id),
        title=_required(obj, "title", _str),
        raw=value,
    )


@_passthrough
def encode_list_info(item: ListInfo) -> dict:
    return {"id": item.id, "title": item.title}


def decode_results(value: Any) -> Results:
    obj = _object(value)
    return Results(
        accounts=_required(obj, "accounts", _list(decode_account)),
        statuses=_required(obj, "statuses", _list(decode_status)),
        hashtags=_required(obj, "hashtags", _list(decode_tag)),
        raw=value,
    )


@_passthrough
def encode_results(results: Results) -> dict:
    return {
        "accounts": encode_list(results.accounts, encode_account),
        "statuses": encode_list(results.statuses, encode_status),
        "hashtags": encode_list(results.hashtags, encode_tag),
    }


# ── The Entity union ──


def _many(encode):
    return lambda items: encode_list(items, encode)


# tag -> (decoder of the payload, encoder of the payload)
_CODECS: dict[type, tuple[Callable[[Any], Any], Callable[[Any], Any]]] = {
    AccountEntity: (decode_account, encode_account),
    AccountListEntity: (_list(decode_account), _many(encode_account)),
    ActivityListEntity: (_list(decode_activity), _many(encode_activity)),
    AppEntity: (decode_app, encode_app),
    ApplicationEntity: (decode_application, encode_application),
    AttachmentEntity: (decode_attachment, encode_attachment),
    CardEntity: (decode_card, encode_card),
    ContextEntity: (decode_context, encode_context),
    ConversationEntity: (decode_conversation, encode_conversation),
    ConversationListEntity: (_list(decode_conversation), _many(encode_conversation)),
    EmojiListEntity: (_list(decode_emoji), _many(encode_emoji)),
    ErrorEntity: (decode_error, encode_error),
    FilterEntity: (decode_filter, encode_filter),
    FilterListEntity: (_list(decode_filter), _many(encode_filter)),
    GroupEntity: (decode_group, encode_group),
    GroupListEntity: (_list(decode_group), _many(encode_group)),
    GroupRelationshipEntity: (decode_group_relationship, encode_group_relationship),
    GroupRelationshipListEntity: (
        _list(decode_group_relationship),
        _many(encode_group_relationship),
    ),
    InstanceEntity: (decode_instance, encode_instance),
    ListInfoEntity: (decode_list_info, encode_list_info),
    ListInfoListEntity: (_list(decode_list_info), _many(encode_list_info)),
    NotificationEntity: (decode_notification, encode_notification),
    NotificationListEntity: (_list(decode_notification), _many(encode_notification)),
    PollEntity: (decode_poll, encode_poll),
    RelationshipEntity: (decode_relationship, encode_relationship),
    RelationshipListEntity: (_list(decode_relationship), _many(encode_relationship)),
    ResultsEntity: (decode_results, encode_results),
    ScheduledStatusEntity: (decode_scheduled_status, encode_scheduled_status),
    ScheduledStatusListEntity: (
        _list(decode_scheduled_status),
        _many(encode_scheduled_status),
    ),
    StatusEntity: (decode_status, encode_status),
    StatusListEntity: (_list(decode_status), _many(encode_status)),
    StringListEntity: (_list(_str), list),
    TagListEntity: (_list(decode_tag), _many(encode_tag)),
}

# The order decode_entity tries tags in. Some shapes are structurally
# subsets of others (a ListInfo is a Group without a description, a bare
# string is a valid v1 Tag), so the more specific decoder must come first.
# Changing this order changes what decode_entity returns.
#
# ApplicationEntity is left out: any object with a "name" would decode as
# one (a Tag, an Emoji, a custom field), and no endpoint returns a bare
# Application. It is only ever embedded in a Status or asked for by tag.
DECODE_PRIORITY: tuple[type, ...] = (
    # arrays
    StringListEntity,
    StatusListEntity,
    NotificationListEntity,
    ScheduledStatusListEntity,
    ConversationListEntity,
    AccountListEntity,
    RelationshipListEntity,
    GroupRelationshipListEntity,
    FilterListEntity,
    GroupListEntity,
    ListInfoListEntity,
    EmojiListEntity,
    TagListEntity,
    ActivityListEntity,
    # objects
    StatusEntity,
    NotificationEntity,
    ScheduledStatusEntity,
    ConversationEntity,
    AccountEntity,
    InstanceEntity,
    RelationshipEntity,
    GroupRelationshipEntity,
    ContextEntity,
    ResultsEntity,
    PollEntity,
    FilterEntity,
    AttachmentEntity,
    CardEntity,
    GroupEntity,
    ListInfoEntity,
    AppEntity,
    ErrorEntity,
)


def decode_no_entity(value: Any) -> NoEntity:
    """Whatever the body was, the caller expects nothing back."""
    return NoEntity()


def entity_decoder(tag: type) -> Callable[[Any], Entity]:
    """Return a function decoding a JSON value into the given Entity tag."""
    if tag is NoEntity:
        return decode_no_entity
    if tag is ValueEntity:
        return ValueEntity
    decode, _ = _CODECS[tag]

    def decoder(value: Any) -> Entity:
        return tag(decode(value))

    decoder.__name__ = f"decode_{tag.__name__}"
    return decoder


def decode_entity(value: Any) -> Entity:
    """Decode a JSON value into whichever Entity it is.

    Tries each tag in DECODE_PRIORITY and returns the first that decodes.
    JSON null is NoEntity; anything no decoder accepts is a ValueEntity.
    """
    if value is None:
        return NoEntity()
    for tag in DECODE_PRIORITY:
        try:
            return entity_decoder(tag)(value)
        except DecodeError:
            continue
    return ValueEntity(value)


def encode_entity(entity: Entity) -> Any:
    """Encode an Entity back to a JSON value."""
    if isinstance(entity, NoEntity):
        return None
    if isinstance(entity, ValueEntity):
        return entity.value
    _, encode = _CODECS[type(entity)]
    return encode(entity.value)
