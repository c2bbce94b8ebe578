"""Data models for Mastodon API entities.

Every dataclass that can be decoded from the wire carries a ``raw`` field
holding the exact JSON value it came from. ``raw`` is excluded from equality,
so a decoded entity compares equal to one built locally from the same fields.
Entities built locally leave ``raw`` as None.

Timestamps are kept as the ISO-8601 strings the server sends.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


def _raw() -> Any:
    return field(default=None, compare=False, repr=False)


# ── Enumerations ──


@dataclass(frozen=True)
class Unknown:
    """An enumerated string the client doesn't recognise (yet)."""

    value: str


class Visibility(str, Enum):
    PUBLIC = "public"
    UNLISTED = "unlisted"
    PRIVATE = "private"
    DIRECT = "direct"


class Privacy(str, Enum):
    PUBLIC = "public"
    UNLISTED = "unlisted"
    PRIVATE = "private"


class NotificationType(str, Enum):
    MENTION = "mention"
    STATUS = "status"
    REBLOG = "reblog"
    FOLLOW = "follow"
    FOLLOW_REQUEST = "follow_request"
    FAVOURITE = "favourite"
    POLL = "poll"
    UPDATE = "update"
    ADMIN_SIGN_UP = "admin.sign_up"
    ADMIN_REPORT = "admin.report"


class AttachmentType(str, Enum):
    IMAGE = "image"
    GIFV = "gifv"
    VIDEO = "video"
    AUDIO = "audio"
    UNKNOWN = "unknown"  # the server's own "unknown", not Unknown(...)


class CardType(str, Enum):
    LINK = "link"
    PHOTO = "photo"
    VIDEO = "video"
    RICH = "rich"


class FilterContext(str, Enum):
    HOME = "home"
    NOTIFICATIONS = "notifications"
    PUBLIC = "public"
    THREAD = "thread"
    ACCOUNT = "account"


# ── Accounts ──


@dataclass
class Emoji:
    shortcode: str
    url: str
    static_url: str
    visible_in_picker: bool = False
    raw: Any = _raw()


@dataclass
class Field:
    """A profile metadata row."""

    name: str
    value: str
    verified_at: str | None = None
    raw: Any = _raw()


@dataclass
class Source:
    """Account defaults, only returned by verify/update credentials."""

    note: str = ""
    privacy: Privacy | Unknown | None = None
    sensitive: bool = False
    language: str | None = None
    fields: list[Field] = field(default_factory=list)
    raw: Any = _raw()


@dataclass
class WrappedAccount:
    """One level of indirection for an account embedded in an account."""

    account: "Account"


@dataclass
class Account:
    id: str
    username: str
    acct: str  # username@domain, or bare username for local accounts
    display_name: str
    created_at: str
    url: str
    avatar: str
    header: str
    note: str = ""
    avatar_static: str = ""
    header_static: str = ""
    locked: bool = False
    bot: bool = False
    group: bool = False
    discoverable: bool = False
    followers_count: int = 0
    following_count: int = 0
    statuses_count: int = 0
    emojis: list[Emoji] = field(default_factory=list)
    fields: list[Field] = field(default_factory=list)
    moved: WrappedAccount | None = None
    source: Source | None = None
    raw: Any = _raw()


@dataclass
class Relationship:
    id: str
    following: bool = False
    followed_by: bool = False
    blocking: bool = False
    muting: bool = False
    muting_notifications: bool = False
    requested: bool = False
    domain_blocking: bool = False
    showing_reblogs: bool = False
    endorsed: bool = False
    raw: Any = _raw()


# ── Apps ──


@dataclass
class App:
    """An OAuth application registered with a server (POST /api/v1/apps)."""

    client_id: str
    client_secret: str
    id: str | None = None
    name: str | None = None
    website: str | None = None
    redirect_uri: str | None = None
    vapid_key: str | None = None
    raw: Any = _raw()


@dataclass
class Application:
    """The application a status was posted from."""

    name: str
    website: str | None = None
    raw: Any = _raw()


# ── Media ──


@dataclass
class Focus:
    x: float
    y: float
    raw: Any = _raw()


@dataclass
class MetaInfo:
    width: int | None = None
    height: int | None = None
    size: str | None = None  # "640x480"
    aspect: float | None = None
    frame_rate: str | None = None
    duration: float | None = None
    bitrate: int | None = None
    raw: Any = _raw()


@dataclass
class ImageMeta:
    original: MetaInfo | None = None
    small: MetaInfo | None = None
    focus: Focus | None = None
    raw: Any = _raw()


@dataclass
class VideoMeta:
    original: MetaInfo | None = None
    small: MetaInfo | None = None
    length: str | None = None
    duration: float | None = None
    fps: int | None = None
    audio_encode: str | None = None
    audio_bitrate: str | None = None
    audio_channels: str | None = None
    raw: Any = _raw()


@dataclass
class AudioMeta:
    original: MetaInfo | None = None
    length: str | None = None
    duration: float | None = None
    audio_encode: str | None = None
    audio_bitrate: str | None = None
    audio_channels: str | None = None
    raw: Any = _raw()


@dataclass
class UnknownMeta:
    """Meta for an attachment type without a known shape."""

    value: Any


Meta = ImageMeta | VideoMeta | AudioMeta | UnknownMeta


@dataclass
class Attachment:
    id: str
    type: AttachmentType | Unknown
    url: str | None = None
    preview_url: str | None = None
    remote_url: str | None = None
    text_url: str | None = None
    meta: Meta | None = None
    description: str | None = None
    blurhash: str | None = None
    raw: Any = _raw()


# ── Statuses ──


@dataclass
class Mention:
    id: str
    username: str
    acct: str
    url: str
    raw: Any = _raw()


@dataclass
class History:
    """Daily usage of a hashtag. The server sends the counts as strings."""

    day: int
    uses: int
    accounts: int
    raw: Any = _raw()


@dataclass
class Tag:
    name: str
    url: str
    history: list[History] = field(default_factory=list)
    raw: Any = _raw()


@dataclass
class Card:
    url: str
    title: str
    description: str
    type: CardType | Unknown
    image: str | None = None
    author_name: str | None = None
    author_url: str | None = None
    provider_name: str | None = None
    provider_url: str | None = None
    html: str | None = None
    width: int | None = None
    height: int | None = None
    raw: Any = _raw()


@dataclass
class PollOption:
    title: str
    votes_count: int | None = None  # None when results are hidden
    raw: Any = _raw()


@dataclass
class Poll:
    id: str
    options: list[PollOption]
    expires_at: str | None = None
    expired: bool = False
    multiple: bool = False
    votes_count: int = 0
    voted: bool = False
    emojis: list[Emoji] = field(default_factory=list)
    raw: Any = _raw()


@dataclass
class Group:
    id: str
    title: str
    description: str
    cover_image_url: str | None = None
    is_archived: bool = False
    member_count: int = 0
    raw: Any = _raw()


@dataclass
class GroupRelationship:
    id: str
    member: bool = False
    admin: bool = False
    unread_count: int = 0
    raw: Any = _raw()


@dataclass
class WrappedStatus:
    """One level of indirection for a status embedded in a status."""

    status: "Status"


@dataclass
class Status:
    id: str
    uri: str
    created_at: str
    account: Account
    content: str
    visibility: Visibility | Unknown
    url: str | None = None
    in_reply_to_id: str | None = None
    in_reply_to_account_id: str | None = None
    reblog: WrappedStatus | None = None
    quote: WrappedStatus | None = None
    spoiler_text: str = ""
    sensitive: bool = False
    language: str | None = None
    replies_count: int = 0
    reblogs_count: int = 0
    favourites_count: int = 0
    reblogged: bool = False
    favourited: bool = False
    muted: bool = False
    pinned: bool = False
    media_attachments: list[Attachment] = field(default_factory=list)
    mentions: list[Mention] = field(default_factory=list)
    tags: list[Tag] = field(default_factory=list)
    emojis: list[Emoji] = field(default_factory=list)
    card: Card | None = None
    poll: Poll | None = None
    application: Application | None = None
    group: Group | None = None
    raw: Any = _raw()


@dataclass
class StatusParams:
    """Parameters of a scheduled status, as echoed back by the server."""

    text: str
    visibility: Visibility | Unknown | None = None
    in_reply_to_id: str | None = None
    media_ids: list[str] = field(default_factory=list)
    sensitive: bool = False
    spoiler_text: str | None = None
    scheduled_at: str | None = None
    application_id: str | None = None
    raw: Any = _raw()


@dataclass
class ScheduledStatus:
    id: str
    scheduled_at: str
    params: StatusParams
    media_attachments: list[Attachment] = field(default_factory=list)
    raw: Any = _raw()


@dataclass
class Context:
    ancestors: list[Status] = field(default_factory=list)
    descendants: list[Status] = field(default_factory=list)
    raw: Any = _raw()


@dataclass
class Conversation:
    id: str
    accounts: list[Account]
    last_status: Status | None = None
    unread: bool = False
    raw: Any = _raw()


@dataclass
class Notification:
    id: str
    type: NotificationType | Unknown
    created_at: str
    account: Account
    status: Status | None = None
    raw: Any = _raw()


# ── Everything else ──


@dataclass
class Error:
    """Error body returned alongside a non-2xx status."""

    error: str
    error_description: str | None = None
    raw: Any = _raw()


@dataclass
class Filter:
    id: str
    phrase: str
    context: list[FilterContext | Unknown]
    expires_at: str | None = None
    irreversible: bool = False
    whole_word: bool = False
    raw: Any = _raw()


@dataclass
class Urls:
    streaming_api: str | None = None
    raw: Any = _raw()


@dataclass
class Stats:
    user_count: int = 0
    status_count: int = 0
    domain_count: int = 0
    raw: Any = _raw()


@dataclass
class Instance:
    uri: str
    title: str
    description: str
    email: str
    version: str
    thumbnail: str | None = None
    urls: Urls | None = None
    stats: Stats | None = None
    languages: list[str] = field(default_factory=list)
    contact_account: Account | None = None
    max_toot_chars: int | None = None  # Pleroma and glitch-soc extension
    registrations: bool = False
    approval_required: bool = False
    raw: Any = _raw()


@dataclass
class Activity:
    """One week of instance activity. The server sends the counts as strings."""

    week: int
    statuses: int
    logins: int
    registrations: int
    raw: Any = _raw()


@dataclass
class ListInfo:
    """A user-defined list of accounts."""

    id: str
    title: str
    raw: Any = _raw()


@dataclass
class Results:
    accounts: list[Account] = field(default_factory=list)
    statuses: list[Status] = field(default_factory=list)
    hashtags: list[Tag] = field(default_factory=list)
    raw: Any = _raw()


# ── The Entity union ──
#
# One tag per decodable response shape. ValueEntity carries JSON the client
# has no typed model for; NoEntity stands for an empty or ignored body.


@dataclass
class AccountEntity:
    value: Account


@dataclass
class AccountListEntity:
    value: list[Account]


@dataclass
class ActivityListEntity:
    value: list[Activity]


@dataclass
class AppEntity:
    value: App


@dataclass
class ApplicationEntity:
    value: Application


@dataclass
class AttachmentEntity:
    value: Attachment


@dataclass
class CardEntity:
    value: Card


@dataclass
class ContextEntity:
    value: Context


@dataclass
class ConversationEntity:
    value: Conversation


@dataclass
class ConversationListEntity:
    value: list[Conversation]


@dataclass
class EmojiListEntity:
    value: list[Emoji]


@dataclass
class ErrorEntity:
    value: Error


@dataclass
class FilterEntity:
    value: Filter


@dataclass
class FilterListEntity:
    value: list[Filter]


@dataclass
class GroupEntity:
    value: Group


@dataclass
class GroupListEntity:
    value: list[Group]


@dataclass
class GroupRelationshipEntity:
    value: GroupRelationship


@dataclass
class GroupRelationshipListEntity:
    value: list[GroupRelationship]


@dataclass
class InstanceEntity:
    value: Instance


@dataclass
class ListInfoEntity:
    value: ListInfo


@dataclass
class ListInfoListEntity:
    value: list[ListInfo]


@dataclass
class NotificationEntity:
    value: Notification


@dataclass
class NotificationListEntity:
    value: list[Notification]


@dataclass
class PollEntity:
    value: Poll


@dataclass
class RelationshipEntity:
    value: Relationship


@dataclass
class RelationshipListEntity:
    value: list[Relationship]


@dataclass
class ResultsEntity:
    value: Results


@dataclass
class ScheduledStatusEntity:
    value: ScheduledStatus


@dataclass
class ScheduledStatusListEntity:
    value: list[ScheduledStatus]


@dataclass
class StatusEntity:
    value: Status


@dataclass
class StatusListEntity:
    value: list[Status]


@dataclass
class StringListEntity:
    value: list[str]


@dataclass
class TagListEntity:
    value: list[Tag]


@dataclass
class ValueEntity:
    value: Any


@dataclass
class NoEntity:
    pass


Entity = (
    AccountEntity
    | AccountListEntity
    | ActivityListEntity
    | AppEntity
    | ApplicationEntity
    | AttachmentEntity
    | CardEntity
    | ContextEntity
    | ConversationEntity
    | ConversationListEntity
    | EmojiListEntity
    | ErrorEntity
    | FilterEntity
    | FilterListEntity
    | GroupEntity
    | GroupListEntity
    | GroupRelationshipEntity
    | GroupRelationshipListEntity
    | InstanceEntity
    | ListInfoEntity
    | ListInfoListEntity
    | NotificationEntity
    | NotificationListEntity
    | PollEntity
    | RelationshipEntity
    | RelationshipListEntity
    | ResultsEntity
    | ScheduledStatusEntity
    | ScheduledStatusListEntity
    | StatusEntity
    | StatusListEntity
    | StringListEntity
    | TagListEntity
    | ValueEntity
    | NoEntity
)
