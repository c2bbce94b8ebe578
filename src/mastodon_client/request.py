"""Typed descriptions of Mastodon API calls.

Each API operation is a frozen dataclass carrying exactly the parameters the
endpoint accepts. Operations are grouped by resource family under a common
base class (AccountsRequest, StatusesRequest, ...), and every family derives
from Request. Build the dataclass, hand it to ``builder.build`` (or straight
to a client's ``send``), and it is consumed once.

Names follow the HTTP verb: GetX is a GET, PostX a POST, and so on.
"""

from dataclasses import dataclass, field

from .models import FilterContext, Focus, NotificationType, Privacy, Visibility


@dataclass(frozen=True)
class Paging:
    """Pagination parameters shared by every list-returning request."""

    max_id: str | None = None
    since_id: str | None = None
    min_id: str | None = None
    limit: int | None = None


@dataclass(frozen=True)
class UploadFile:
    """A file to send as one part of a multipart body."""

    filename: str
    content: bytes
    content_type: str = "application/octet-stream"


@dataclass(frozen=True)
class FieldAttribute:
    """A profile metadata row for PatchUpdateCredentials."""

    name: str
    value: str


@dataclass(frozen=True)
class PollDefinition:
    """A poll to attach to a new status."""

    options: tuple[str, ...]
    expires_in: int  # seconds
    multiple: bool = False
    hide_totals: bool = False


class Request:
    """Base of every API request."""


# ── Families ──


class AccountsRequest(Request):
    pass


class AppsRequest(Request):
    pass


class BlocksRequest(Request):
    pass


class CustomEmojisRequest(Request):
    pass


class DomainBlocksRequest(Request):
    pass


class EndorsementsRequest(Request):
    pass


class FavouritesRequest(Request):
    pass


class FiltersRequest(Request):
    pass


class FollowRequestsRequest(Request):
    pass


class FollowSuggestionsRequest(Request):
    pass


class GroupsRequest(Request):
    pass


class InstanceRequest(Request):
    pass


class ListsRequest(Request):
    pass


class MediaRequest(Request):
    pass


class MutesRequest(Request):
    pass


class NotificationsRequest(Request):
    pass


class PollsRequest(Request):
    pass


class ReportsRequest(Request):
    pass


class ScheduledStatusesRequest(Request):
    pass


class SearchRequest(Request):
    pass


class StatusesRequest(Request):
    pass


class TimelinesRequest(Request):
    pass


class TrendsRequest(Request):
    pass


# ── Accounts ──


@dataclass(frozen=True)
class GetAccount(AccountsRequest):
    id: str


@dataclass(frozen=True)
class GetVerifyCredentials(AccountsRequest):
    pass


@dataclass(frozen=True)
class PatchUpdateCredentials(AccountsRequest):
    """Update the logged-in account. Sent as multipart if an image is given."""

    display_name: str | None = None
    note: str | None = None
    avatar: UploadFile | None = None
    header: UploadFile | None = None
    locked: bool | None = None
    privacy: Privacy | None = None
    sensitive: bool | None = None
    language: str | None = None
    fields_attributes: tuple[FieldAttribute, ...] | None = None


@dataclass(frozen=True)
class GetFollowers(AccountsRequest):
    id: str
    limit: int | None = None


@dataclass(frozen=True)
class GetFollowing(AccountsRequest):
    id: str
    limit: int | None = None


@dataclass(frozen=True)
class GetStatuses(AccountsRequest):
    id: str
    only_media: bool = False
    pinned: bool = False
    exclude_replies: bool = False
    exclude_reblogs: bool = False
    paging: Paging | None = None


@dataclass(frozen=True)
class PostFollow(AccountsRequest):
    id: str
    reblogs: bool = True


@dataclass(frozen=True)
class PostUnfollow(AccountsRequest):
    id: str


@dataclass(frozen=True)
class GetRelationships(AccountsRequest):
    ids: tuple[str, ...]


@dataclass(frozen=True)
class GetSearchAccounts(AccountsRequest):
    q: str
    limit: int | None = None
    resolve: bool = False
    following: bool = False


# ── Apps ──


@dataclass(frozen=True)
class PostApp(AppsRequest):
    client_name: str
    redirect_uris: str
    scopes: tuple[str, ...]
    website: str | None = None


@dataclass(frozen=True)
class GetVerifyAppCredentials(AppsRequest):
    pass


# ── Blocks ──


@dataclass(frozen=True)
class GetBlocks(BlocksRequest):
    paging: Paging | None = None


@dataclass(frozen=True)
class PostBlock(BlocksRequest):
    id: str


@dataclass(frozen=True)
class PostUnblock(BlocksRequest):
    id: str


# ── Custom emojis ──


@dataclass(frozen=True)
class GetCustomEmojis(CustomEmojisRequest):
    pass


# ── Domain blocks ──


@dataclass(frozen=True)
class GetDomainBlocks(DomainBlocksRequest):
    paging: Paging | None = None


@dataclass(frozen=True)
class PostDomainBlock(DomainBlocksRequest):
    domain: str


@dataclass(frozen=True)
class DeleteDomainBlock(DomainBlocksRequest):
    domain: str


# ── Endorsements ──


@dataclass(frozen=True)
class GetEndorsements(EndorsementsRequest):
    paging: Paging | None = None


@dataclass(frozen=True)
class PostPinAccount(EndorsementsRequest):
    id: str


@dataclass(frozen=True)
class PostUnpinAccount(EndorsementsRequest):
    id: str


# ── Favourites ──


@dataclass(frozen=True)
class GetFavourites(FavouritesRequest):
    paging: Paging | None = None


@dataclass(frozen=True)
class PostFavourite(FavouritesRequest):
    id: str


@dataclass(frozen=True)
class PostUnfavourite(FavouritesRequest):
    id: str


# ── Filters ──


@dataclass(frozen=True)
class GetFilters(FiltersRequest):
    pass


@dataclass(frozen=True)
class GetFilter(FiltersRequest):
    id: str


@dataclass(frozen=True)
class PostFilter(FiltersRequest):
    phrase: str
    context: tuple[FilterContext, ...]
    irreversible: bool = False
    whole_word: bool = False
    expires_in: int | None = None  # seconds


@dataclass(frozen=True)
class PutFilter(FiltersRequest):
    id: str
    phrase: str
    context: tuple[FilterContext, ...]
    irreversible: bool = False
    whole_word: bool = False
    expires_in: int | None = None


@dataclass(frozen=True)
class DeleteFilter(FiltersRequest):
    id: str


# ── Follow requests ──


@dataclass(frozen=True)
class GetFollowRequests(FollowRequestsRequest):
    limit: int | None = None


@dataclass(frozen=True)
class PostAuthorizeFollow(FollowRequestsRequest):
    id: str


@dataclass(frozen=True)
class PostRejectFollow(FollowRequestsRequest):
    id: str


# ── Follow suggestions ──


@dataclass(frozen=True)
class GetFollowSuggestions(FollowSuggestionsRequest):
    pass


@dataclass(frozen=True)
class DeleteFollowSuggestion(FollowSuggestionsRequest):
    account_id: str


# ── Groups (Gab extension) ──


@dataclass(frozen=True)
class GetGroups(GroupsRequest):
    tab: str | None = None  # "featured", "member" or "admin"


@dataclass(frozen=True)
class GetGroup(GroupsRequest):
    id: str


@dataclass(frozen=True)
class GetGroupAccounts(GroupsRequest):
    id: str
    paging: Paging | None = None


@dataclass(frozen=True)
class GetGroupRelationships(GroupsRequest):
    ids: tuple[str, ...]


@dataclass(frozen=True)
class PostGroupJoin(GroupsRequest):
    id: str


@dataclass(frozen=True)
class DeleteGroupJoin(GroupsRequest):
    id: str


@dataclass(frozen=True)
class PostGroup(GroupsRequest):
    title: str
    description: str
    cover_image: UploadFile | None = None


@dataclass(frozen=True)
class PutGroup(GroupsRequest):
    id: str
    title: str | None = None
    description: str | None = None
    cover_image: UploadFile | None = None


# ── Instance ──


@dataclass(frozen=True)
class GetInstance(InstanceRequest):
    pass


@dataclass(frozen=True)
class GetActivity(InstanceRequest):
    pass


@dataclass(frozen=True)
class GetPeers(InstanceRequest):
    pass


# ── Lists ──


@dataclass(frozen=True)
class GetLists(ListsRequest):
    pass


@dataclass(frozen=True)
class GetListAccounts(ListsRequest):
    id: str
    limit: int | None = None


@dataclass(frozen=True)
class GetAccountLists(ListsRequest):
    id: str  # the account


@dataclass(frozen=True)
class GetList(ListsRequest):
    id: str


@dataclass(frozen=True)
class PostList(ListsRequest):
    title: str


@dataclass(frozen=True)
class PutList(ListsRequest):
    id: str
    title: str


@dataclass(frozen=True)
class DeleteList(ListsRequest):
    id: str


@dataclass(frozen=True)
class PostListAccounts(ListsRequest):
    id: str
    account_ids: tuple[str, ...]


@dataclass(frozen=True)
class DeleteListAccounts(ListsRequest):
    id: str
    account_ids: tuple[str, ...]


# ── Media ──


@dataclass(frozen=True)
class PostMedia(MediaRequest):
    file: UploadFile
    description: str | None = None
    focus: Focus | None = None


@dataclass(frozen=True)
class PutMedia(MediaRequest):
    id: str
    description: str | None = None
    focus: Focus | None = None


# ── Mutes ──


@dataclass(frozen=True)
class GetAccountMutes(MutesRequest):
    paging: Paging | None = None


@dataclass(frozen=True)
class PostAccountMute(MutesRequest):
    id: str
    notifications: bool = True


@dataclass(frozen=True)
class PostAccountUnmute(MutesRequest):
    id: str


@dataclass(frozen=True)
class PostStatusMute(MutesRequest):
    id: str


@dataclass(frozen=True)
class PostStatusUnmute(MutesRequest):
    id: str


# ── Notifications ──


@dataclass(frozen=True)
class GetNotifications(NotificationsRequest):
    paging: Paging | None = None
    exclude_types: tuple[NotificationType, ...] = ()
    account_id: str | None = None


@dataclass(frozen=True)
class GetNotification(NotificationsRequest):
    id: str


@dataclass(frozen=True)
class PostClearNotifications(NotificationsRequest):
    pass


@dataclass(frozen=True)
class PostDismissNotification(NotificationsRequest):
    id: str


# ── Polls ──


@dataclass(frozen=True)
class GetPoll(PollsRequest):
    id: str


@dataclass(frozen=True)
class PostVotes(PollsRequest):
    id: str
    choices: tuple[int, ...]


# ── Reports ──


@dataclass(frozen=True)
class PostReport(ReportsRequest):
    account_id: str
    status_ids: tuple[str, ...] = ()
    comment: str | None = None
    forward: bool = False


# ── Scheduled statuses ──


@dataclass(frozen=True)
class GetScheduledStatuses(ScheduledStatusesRequest):
    paging: Paging | None = None


@dataclass(frozen=True)
class GetScheduledStatus(ScheduledStatusesRequest):
    id: str


@dataclass(frozen=True)
class PutScheduledStatus(ScheduledStatusesRequest):
    id: str
    scheduled_at: str | None = None


@dataclass(frozen=True)
class DeleteScheduledStatus(ScheduledStatusesRequest):
    id: str


# ── Search ──


@dataclass(frozen=True)
class GetSearch(SearchRequest):
    q: str
    resolve: bool = False
    following: bool = False
    limit: int | None = None
    offset: int | None = None


# ── Statuses ──


@dataclass(frozen=True)
class GetStatus(StatusesRequest):
    id: str


@dataclass(frozen=True)
class GetStatusContext(StatusesRequest):
    id: str


@dataclass(frozen=True)
class GetStatusCard(StatusesRequest):
    id: str


@dataclass(frozen=True)
class GetStatusRebloggedBy(StatusesRequest):
    id: str
    limit: int | None = None


@dataclass(frozen=True)
class GetStatusFavouritedBy(StatusesRequest):
    id: str
    limit: int | None = None


@dataclass(frozen=True)
class PostStatus(StatusesRequest):
    """Publish (or schedule) a status.

    ``idempotency_key`` is sent as the Idempotency-Key header; use a fresh
    one for each logically new post so retries don't double-post.
    """

    status: str | None = None
    in_reply_to_id: str | None = None
    media_ids: tuple[str, ...] = ()
    poll: PollDefinition | None = None
    sensitive: bool = False
    spoiler_text: str | None = None
    visibility: Visibility | None = None
    scheduled_at: str | None = None
    language: str | None = None
    quote_of_id: str | None = None
    group_id: str | None = None
    idempotency_key: str | None = field(default=None, compare=False)


@dataclass(frozen=True)
class DeleteStatus(StatusesRequest):
    id: str


@dataclass(frozen=True)
class PostReblogStatus(StatusesRequest):
    id: str


@dataclass(frozen=True)
class PostUnreblogStatus(StatusesRequest):
    id: str


@dataclass(frozen=True)
class PostPinStatus(StatusesRequest):
    id: str


@dataclass(frozen=True)
class PostUnpinStatus(StatusesRequest):
    id: str


# ── Timelines ──


@dataclass(frozen=True)
class GetHomeTimeline(TimelinesRequest):
    paging: Paging | None = None


@dataclass(frozen=True)
class GetConversations(TimelinesRequest):
    paging: Paging | None = None


@dataclass(frozen=True)
class GetPublicTimeline(TimelinesRequest):
    local: bool = False
    only_media: bool = False
    paging: Paging | None = None


@dataclass(frozen=True)
class GetTagTimeline(TimelinesRequest):
    hashtag: str
    local: bool = False
    only_media: bool = False
    paging: Paging | None = None


@dataclass(frozen=True)
class GetListTimeline(TimelinesRequest):
    list_id: str
    paging: Paging | None = None


@dataclass(frozen=True)
class GetGroupTimeline(TimelinesRequest):
    group_id: str
    paging: Paging | None = None


# ── Trends ──


@dataclass(frozen=True)
class GetTrends(TrendsRequest):
    pass


# Requests servers answer without an access token.
AUTH_OPTIONAL: frozenset[type] = frozenset(
    {
        GetInstance,
        GetActivity,
        GetPeers,
        GetCustomEmojis,
        GetPublicTimeline,
        GetTagTimeline,
        GetStatus,
        GetStatusContext,
        GetStatusCard,
        GetPoll,
        GetTrends,
    }
)


def requires_auth(request: Request) -> bool:
    return type(request) not in AUTH_OPTIONAL
