"""Turn typed requests into fully formed HTTP calls.

``build(server, token, request)`` is pure: it does no I/O, and every
Request subclass has a route registered here. The result is a
CallDescriptor holding the method, absolute URL, headers, body, and the
decoder to apply to a successful response. The decoder is fixed per request,
never guessed from the response.

URLs are always ``https://{server}/api/v1/{path}``. Query parameters that
are None are left out entirely. Boolean query flags come in two kinds, and
each parameter uses the kind matching the server's default:

    _flag       sends "true" only when true (server default is false)
    _unflag     sends "false" only when false (server default is true)
"""

import functools
import logging
from dataclasses import dataclass, field
from typing import Any, Callable
from urllib.parse import quote

import httpx

from .codec import entity_decoder
from .models import (
    AccountEntity,
    AccountListEntity,
    ActivityListEntity,
    AppEntity,
    AttachmentEntity,
    CardEntity,
    ContextEntity,
    ConversationListEntity,
    EmojiListEntity,
    Entity,
    FilterEntity,
    FilterListEntity,
    GroupEntity,
    GroupListEntity,
    GroupRelationshipEntity,
    GroupRelationshipListEntity,
    InstanceEntity,
    ListInfoEntity,
    ListInfoListEntity,
    NoEntity,
    NotificationEntity,
    NotificationListEntity,
    PollEntity,
    RelationshipEntity,
    RelationshipListEntity,
    ResultsEntity,
    ScheduledStatusEntity,
    ScheduledStatusListEntity,
    StatusEntity,
    StatusListEntity,
    StringListEntity,
    TagListEntity,
)
from .request import (
    DeleteDomainBlock,
    DeleteFilter,
    DeleteFollowSuggestion,
    DeleteGroupJoin,
    DeleteList,
    DeleteListAccounts,
    DeleteScheduledStatus,
    DeleteStatus,
    GetAccount,
    GetAccountLists,
    GetAccountMutes,
    GetActivity,
    GetBlocks,
    GetConversations,
    GetCustomEmojis,
    GetDomainBlocks,
    GetEndorsements,
    GetFavourites,
    GetFilter,
    GetFilters,
    GetFollowers,
    GetFollowing,
    GetFollowRequests,
    GetFollowSuggestions,
    GetGroup,
    GetGroupAccounts,
    GetGroupRelationships,
    GetGroups,
    GetGroupTimeline,
    GetHomeTimeline,
    GetInstance,
    GetList,
    GetListAccounts,
    GetLists,
    GetListTimeline,
    GetNotification,
    GetNotifications,
    GetPeers,
    GetPoll,
    GetPublicTimeline,
    GetRelationships,
    GetScheduledStatus,
    GetScheduledStatuses,
    GetSearch,
    GetSearchAccounts,
    GetStatus,
    GetStatusCard,
    GetStatusContext,
    GetStatuses,
    GetStatusFavouritedBy,
    GetStatusRebloggedBy,
    GetTagTimeline,
    GetTrends,
    GetVerifyAppCredentials,
    GetVerifyCredentials,
    Paging,
    PatchUpdateCredentials,
    PostAccountMute,
    PostAccountUnmute,
    PostApp,
    PostAuthorizeFollow,
    PostBlock,
    PostClearNotifications,
    PostDismissNotification,
    PostDomainBlock,
    PostFavourite,
    PostFilter,
    PostFollow,
    PostGroup,
    PostGroupJoin,
    PostList,
    PostListAccounts,
    PostMedia,
    PostPinAccount,
    PostPinStatus,
    PostReblogStatus,
    PostRejectFollow,
    PostReport,
    PostStatus,
    PostStatusMute,
    PostStatusUnmute,
    PostUnblock,
    PostUnfavourite,
    PostUnfollow,
    PostUnpinAccount,
    PostUnpinStatus,
    PostUnreblogStatus,
    PostVotes,
    PutFilter,
    PutGroup,
    PutList,
    PutMedia,
    PutScheduledStatus,
    Request,
    UploadFile,
)

logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1/"


@dataclass
class CallDescriptor:
    """One HTTP call, ready to execute.

    Build a fresh descriptor for every call; don't reuse one.
    At most one of ``json`` and ``data``/``files`` is set.
    """

    method: str
    url: str
    headers: dict[str, str]
    request: Request
    decoder: Callable[[Any], Entity]
    json: Any = None
    data: dict[str, str] | None = None
    files: dict[str, tuple[str, bytes, str]] | None = None


@dataclass
class _Route:
    method: str
    path: str
    tag: type
    params: list[tuple[str, str]] = field(default_factory=list)
    json: Any = None
    data: dict[str, str] | None = None
    files: dict[str, tuple[str, bytes, str]] | None = None


def normalize_server(server: str) -> str:
    """Reduce "https://example.social/" to "example.social"."""
    server = server.strip()
    for scheme in ("https://", "http://"):
        if server.lower().startswith(scheme):
            server = server[len(scheme):]
    return server.rstrip("/")


def authorization_header(token: str) -> str:
    """Tokens minted by the login flow already carry their scheme."""
    if " " in token.strip():
        return token.strip()
    return f"Bearer {token.strip()}"


def build(
    server: str,
    token: str | None,
    request: Request,
    user_agent: str | None = None,
) -> CallDescriptor:
    """Map a request to the HTTP call that performs it."""
    route = _route(request)
    url = f"https://{normalize_server(server)}{API_PREFIX}{route.path}"
    if route.params:
        url = f"{url}?{httpx.QueryParams(route.params)}"

    headers = {"Accept": "application/json"}
    if token:
        headers["Authorization"] = authorization_header(token)
    if user_agent:
        headers["User-Agent"] = user_agent
    if isinstance(request, PostStatus) and request.idempotency_key:
        headers["Idempotency-Key"] = request.idempotency_key

    logger.debug("Built %s %s for %s", route.method, url, type(request).__name__)
    return CallDescriptor(
        method=route.method,
        url=url,
        headers=headers,
        request=request,
        decoder=entity_decoder(route.tag),
        json=route.json,
        data=route.data,
        files=route.files,
    )


# ── Parameter helpers ──


def _seg(value: str) -> str:
    return quote(str(value), safe="")


def _opt(params: list, name: str, value) -> None:
    if value is not None:
        params.append((name, str(value)))


def _flag(params: list, name: str, value: bool) -> None:
    if value:
        params.append((name, "true"))


def _unflag(params: list, name: str, value: bool) -> None:
    if not value:
        params.append((name, "false"))


def _many(params: list, name: str, values) -> None:
    for value in values:
        params.append((f"{name}[]", str(value)))


def _paging(params: list, paging: Paging | None) -> list:
    if paging is not None:
        _opt(params, "max_id", paging.max_id)
        _opt(params, "since_id", paging.since_id)
        _opt(params, "min_id", paging.min_id)
        _opt(params, "limit", paging.limit)
    return params


def _limit(limit: int | None) -> list:
    params: list = []
    _opt(params, "limit", limit)
    return params


def _compact(body: dict) -> dict:
    return {k: v for k, v in body.items() if v is not None}


def _form_value(value) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _multipart(fields: dict, files: dict[str, UploadFile | None]) -> dict:
    """Route kwargs for a multipart body; None values are left out."""
    return {
        "data": {k: _form_value(v) for k, v in fields.items() if v is not None},
        "files": {
            k: (f.filename, f.content, f.content_type)
            for k, f in files.items()
            if f is not None
        },
    }


def _get(path: str, tag: type, params: list | None = None) -> _Route:
    return _Route("GET", path, tag, params=params or [])


def _post(path: str, tag: type, params: list | None = None, **body) -> _Route:
    return _Route("POST", path, tag, params=params or [], **body)


def _put(path: str, tag: type, **body) -> _Route:
    return _Route("PUT", path, tag, **body)


def _delete(path: str, tag: type, params: list | None = None) -> _Route:
    return _Route("DELETE", path, tag, params=params or [])


@functools.singledispatch
def _route(request: Request) -> _Route:
    raise TypeError(f"No route for request type {type(request).__name__}")


# ── Accounts ──


@_route.register
def _(r: GetAccount) -> _Route:
    return _get(f"accounts/{_seg(r.id)}", AccountEntity)


@_route.register
def _(r: GetVerifyCredentials) -> _Route:
    return _get("accounts/verify_credentials", AccountEntity)


@_route.register
def _(r: PatchUpdateCredentials) -> _Route:
    path = "accounts/update_credentials"
    if r.avatar is not None or r.header is not None:
        fields = {
            "display_name": r.display_name,
            "note": r.note,
            "locked": r.locked,
            "source[privacy]": r.privacy.value if r.privacy else None,
            "source[sensitive]": r.sensitive,
            "source[language]": r.language,
        }
        for index, attr in enumerate(r.fields_attributes or ()):
            fields[f"fields_attributes[{index}][name]"] = attr.name
            fields[f"fields_attributes[{index}][value]"] = attr.value
        body = _multipart(fields, {"avatar": r.avatar, "header": r.header})
        return _Route("PATCH", path, AccountEntity, **body)

    source = _compact(
        {
            "privacy": r.privacy.value if r.privacy else None,
            "sensitive": r.sensitive,
            "language": r.language,
        }
    )
    body = _compact(
        {
            "display_name": r.display_name,
            "note": r.note,
            "locked": r.locked,
            "source": source or None,
        }
    )
    if r.fields_attributes is not None:
        body["fields_attributes"] = [
            {"name": a.name, "value": a.value} for a in r.fields_attributes
        ]
    return _Route("PATCH", path, AccountEntity, json=body)


@_route.register
def _(r: GetFollowers) -> _Route:
    return _get(f"accounts/{_seg(r.id)}/followers", AccountListEntity, _limit(r.limit))


@_route.register
def _(r: GetFollowing) -> _Route:
    return _get(f"accounts/{_seg(r.id)}/following", AccountListEntity, _limit(r.limit))


@_route.register
def _(r: GetStatuses) -> _Route:
    params: list = []
    _flag(params, "only_media", r.only_media)
    _flag(params, "pinned", r.pinned)
    _flag(params, "exclude_replies", r.exclude_replies)
    _flag(params, "exclude_reblogs", r.exclude_reblogs)
    _paging(params, r.paging)
    return _get(f"accounts/{_seg(r.id)}/statuses", StatusListEntity, params)


@_route.register
def _(r: PostFollow) -> _Route:
    params: list = []
    _unflag(params, "reblogs", r.reblogs)
    return _post(f"accounts/{_seg(r.id)}/follow", RelationshipEntity, params)


@_route.register
def _(r: PostUnfollow) -> _Route:
    return _post(f"accounts/{_seg(r.id)}/unfollow", RelationshipEntity)


@_route.register
def _(r: GetRelationships) -> _Route:
    params: list = []
    _many(params, "id", r.ids)
    return _get("accounts/relationships", RelationshipListEntity, params)


@_route.register
def _(r: GetSearchAccounts) -> _Route:
    params = [("q", r.q)]
    _opt(params, "limit", r.limit)
    _flag(params, "resolve", r.resolve)
    _flag(params, "following", r.following)
    return _get("accounts/search", AccountListEntity, params)


# ── Apps ──


@_route.register
def _(r: PostApp) -> _Route:
    body = _compact(
        {
            "client_name": r.client_name,
            "redirect_uris": r.redirect_uris,
            "scopes": " ".join(r.scopes),
            "website": r.website,
        }
    )
    return _post("apps", AppEntity, json=body)


@_route.register
def _(r: GetVerifyAppCredentials) -> _Route:
    return _get("apps/verify_credentials", AppEntity)


# ── Blocks ──


@_route.register
def _(r: GetBlocks) -> _Route:
    return _get("blocks", AccountListEntity, _paging([], r.paging))


@_route.register
def _(r: PostBlock) -> _Route:
    return _post(f"accounts/{_seg(r.id)}/block", RelationshipEntity)


@_route.register
def _(r: PostUnblock) -> _Route:
    return _post(f"accounts/{_seg(r.id)}/unblock", RelationshipEntity)


# ── Custom emojis ──


@_route.register
def _(r: GetCustomEmojis) -> _Route:
    return _get("custom_emojis", EmojiListEntity)


# ── Domain blocks ──


@_route.register
def _(r: GetDomainBlocks) -> _Route:
    return _get("domain_blocks", StringListEntity, _paging([], r.paging))


@_route.register
def _(r: PostDomainBlock) -> _Route:
    return _post("domain_blocks", NoEntity, json={"domain": r.domain})


@_route.register
def _(r: DeleteDomainBlock) -> _Route:
    return _delete("domain_blocks", NoEntity, [("domain", r.domain)])


# ── Endorsements ──


@_route.register
def _(r: GetEndorsements) -> _Route:
    return _get("endorsements", AccountListEntity, _paging([], r.paging))


@_route.register
def _(r: PostPinAccount) -> _Route:
    return _post(f"accounts/{_seg(r.id)}/pin", RelationshipEntity)


@_route.register
def _(r: PostUnpinAccount) -> _Route:
    return _post(f"accounts/{_seg(r.id)}/unpin", RelationshipEntity)


# ── Favourites ──


@_route.register
def _(r: GetFavourites) -> _Route:
    return _get("favourites", StatusListEntity, _paging([], r.paging))


@_route.register
def _(r: PostFavourite) -> _Route:
    return _post(f"statuses/{_seg(r.id)}/favourite", StatusEntity)


@_route.register
def _(r: PostUnfavourite) -> _Route:
    return _post(f"statuses/{_seg(r.id)}/unfavourite", StatusEntity)


# ── Filters ──


def _filter_body(r: PostFilter | PutFilter) -> dict:
    return _compact(
        {
            "phrase": r.phrase,
            "context": [c.value for c in r.context],
            "irreversible": r.irreversible,
            "whole_word": r.whole_word,
            "expires_in": r.expires_in,
        }
    )


@_route.register
def _(r: GetFilters) -> _Route:
    return _get("filters", FilterListEntity)


@_route.register
def _(r: GetFilter) -> _Route:
    return _get(f"filters/{_seg(r.id)}", FilterEntity)


@_route.register
def _(r: PostFilter) -> _Route:
    return _post("filters", FilterEntity, json=_filter_body(r))


@_route.register
def _(r: PutFilter) -> _Route:
    return _put(f"filters/{_seg(r.id)}", FilterEntity, json=_filter_body(r))


@_route.register
def _(r: DeleteFilter) -> _Route:
    return _delete(f"filters/{_seg(r.id)}", NoEntity)


# ── Follow requests ──


@_route.register
def _(r: GetFollowRequests) -> _Route:
    return _get("follow_requests", AccountListEntity, _limit(r.limit))


@_route.register
def _(r: PostAuthorizeFollow) -> _Route:
    return _post(f"follow_requests/{_seg(r.id)}/authorize", RelationshipEntity)


@_route.register
def _(r: PostRejectFollow) -> _Route:
    return _post(f"follow_requests/{_seg(r.id)}/reject", RelationshipEntity)


# ── Follow suggestions ──


@_route.register
def _(r: GetFollowSuggestions) -> _Route:
    return _get("suggestions", AccountListEntity)


@_route.register
def _(r: DeleteFollowSuggestion) -> _Route:
    return _delete(f"suggestions/{_seg(r.account_id)}", NoEntity)


# ── Groups ──


@_route.register
def _(r: GetGroups) -> _Route:
    params: list = []
    _opt(params, "tab", r.tab)
    return _get("groups", GroupListEntity, params)


@_route.register
def _(r: GetGroup) -> _Route:
    return _get(f"groups/{_seg(r.id)}", GroupEntity)


@_route.register
def _(r: GetGroupAccounts) -> _Route:
    return _get(f"groups/{_seg(r.id)}/accounts", AccountListEntity, _paging([], r.paging))


@_route.register
def _(r: GetGroupRelationships) -> _Route:
    params: list = []
    _many(params, "id", r.ids)
    return _get("groups/relationships", GroupRelationshipListEntity, params)


@_route.register
def _(r: PostGroupJoin) -> _Route:
    return _post(f"groups/{_seg(r.id)}/accounts", GroupRelationshipEntity)


@_route.register
def _(r: DeleteGroupJoin) -> _Route:
    return _delete(f"groups/{_seg(r.id)}/accounts", GroupRelationshipEntity)


def _group_body(r: PostGroup | PutGroup) -> dict:
    fields = {"title": r.title, "description": r.description}
    if r.cover_image is not None:
        return _multipart(fields, {"cover_image": r.cover_image})
    return {"json": _compact(fields)}


@_route.register
def _(r: PostGroup) -> _Route:
    return _post("groups", GroupEntity, **_group_body(r))


@_route.register
def _(r: PutGroup) -> _Route:
    return _put(f"groups/{_seg(r.id)}", GroupEntity, **_group_body(r))


# ── Instance ──


@_route.register
def _(r: GetInstance) -> _Route:
    return _get("instance", InstanceEntity)


@_route.register
def _(r: GetActivity) -> _Route:
    return _get("instance/activity", ActivityListEntity)


@_route.register
def _(r: GetPeers) -> _Route:
    return _get("instance/peers", StringListEntity)


# ── Lists ──


@_route.register
def _(r: GetLists) -> _Route:
    return _get("lists", ListInfoListEntity)


@_route.register
def _(r: GetListAccounts) -> _Route:
    return _get(f"lists/{_seg(r.id)}/accounts", AccountListEntity, _limit(r.limit))


@_route.register
def _(r: GetAccountLists) -> _Route:
    return _get(f"accounts/{_seg(r.id)}/lists", ListInfoListEntity)


@_route.register
def _(r: GetList) -> _Route:
    return _get(f"lists/{_seg(r.id)}", ListInfoEntity)


@_route.register
def _(r: PostList) -> _Route:
    return _post("lists", ListInfoEntity, json={"title": r.title})


@_route.register
def _(r: PutList) -> _Route:
    return _put(f"lists/{_seg(r.id)}", ListInfoEntity, json={"title": r.title})


@_route.register
def _(r: DeleteList) -> _Route:
    return _delete(f"lists/{_seg(r.id)}", NoEntity)


@_route.register
def _(r: PostListAccounts) -> _Route:
    return _post(
        f"lists/{_seg(r.id)}/accounts",
        NoEntity,
        json={"account_ids": list(r.account_ids)},
    )


@_route.register
def _(r: DeleteListAccounts) -> _Route:
    params: list = []
    _many(params, "account_ids", r.account_ids)
    return _delete(f"lists/{_seg(r.id)}/accounts", NoEntity, params)


# ── Media ──


def _focus(focus) -> str | None:
    if focus is None:
        return None
    return f"{focus.x},{focus.y}"


@_route.register
def _(r: PostMedia) -> _Route:
    fields = {"description": r.description, "focus": _focus(r.focus)}
    return _post("media", AttachmentEntity, **_multipart(fields, {"file": r.file}))


@_route.register
def _(r: PutMedia) -> _Route:
    body = _compact({"description": r.description, "focus": _focus(r.focus)})
    return _put(f"media/{_seg(r.id)}", AttachmentEntity, json=body)


# ── Mutes ──


@_route.register
def _(r: GetAccountMutes) -> _Route:
    return _get("mutes", AccountListEntity, _paging([], r.paging))


@_route.register
def _(r: PostAccountMute) -> _Route:
    params: list = []
    _unflag(params, "notifications", r.notifications)
    return _post(f"accounts/{_seg(r.id)}/mute", RelationshipEntity, params)


@_route.register
def _(r: PostAccountUnmute) -> _Route:
    return _post(f"accounts/{_seg(r.id)}/unmute", RelationshipEntity)


@_route.register
def _(r: PostStatusMute) -> _Route:
    return _post(f"statuses/{_seg(r.id)}/mute", StatusEntity)


@_route.register
def _(r: PostStatusUnmute) -> _Route:
    return _post(f"statuses/{_seg(r.id)}/unmute", StatusEntity)


# ── Notifications ──


@_route.register
def _(r: GetNotifications) -> _Route:
    params = _paging([], r.paging)
    _many(params, "exclude_types", [t.value for t in r.exclude_types])
    _opt(params, "account_id", r.account_id)
    return _get("notifications", NotificationListEntity, params)


@_route.register
def _(r: GetNotification) -> _Route:
    return _get(f"notifications/{_seg(r.id)}", NotificationEntity)


@_route.register
def _(r: PostClearNotifications) -> _Route:
    return _post("notifications/clear", NoEntity)


@_route.register
def _(r: PostDismissNotification) -> _Route:
    return _post(f"notifications/{_seg(r.id)}/dismiss", NoEntity)


# ── Polls ──


@_route.register
def _(r: GetPoll) -> _Route:
    return _get(f"polls/{_seg(r.id)}", PollEntity)


@_route.register
def _(r: PostVotes) -> _Route:
    return _post(f"polls/{_seg(r.id)}/votes", PollEntity, json={"choices": list(r.choices)})


# ── Reports ──


@_route.register
def _(r: PostReport) -> _Route:
    body = {"account_id": r.account_id}
    if r.status_ids:
        body["status_ids"] = list(r.status_ids)
    if r.comment is not None:
        body["comment"] = r.comment
    if r.forward:
        body["forward"] = True
    return _post("reports", NoEntity, json=body)


# ── Scheduled statuses ──


@_route.register
def _(r: GetScheduledStatuses) -> _Route:
    return _get("scheduled_statuses", ScheduledStatusListEntity, _paging([], r.paging))


@_route.register
def _(r: GetScheduledStatus) -> _Route:
    return _get(f"scheduled_statuses/{_seg(r.id)}", ScheduledStatusEntity)


@_route.register
def _(r: PutScheduledStatus) -> _Route:
    return _put(
        f"scheduled_statuses/{_seg(r.id)}",
        ScheduledStatusEntity,
        json=_compact({"scheduled_at": r.scheduled_at}),
    )


@_route.register
def _(r: DeleteScheduledStatus) -> _Route:
    return _delete(f"scheduled_statuses/{_seg(r.id)}", NoEntity)


# ── Search ──


@_route.register
def _(r: GetSearch) -> _Route:
    params = [("q", r.q)]
    _flag(params, "resolve", r.resolve)
    _flag(params, "following", r.following)
    _opt(params, "limit", r.limit)
    _opt(params, "offset", r.offset)
    return _get("search", ResultsEntity, params)


# ── Statuses ──


@_route.register
def _(r: GetStatus) -> _Route:
    return _get(f"statuses/{_seg(r.id)}", StatusEntity)


@_route.register
def _(r: GetStatusContext) -> _Route:
    return _get(f"statuses/{_seg(r.id)}/context", ContextEntity)


@_route.register
def _(r: GetStatusCard) -> _Route:
    return _get(f"statuses/{_seg(r.id)}/card", CardEntity)


@_route.register
def _(r: GetStatusRebloggedBy) -> _Route:
    return _get(f"statuses/{_seg(r.id)}/reblogged_by", AccountListEntity, _limit(r.limit))


@_route.register
def _(r: GetStatusFavouritedBy) -> _Route:
    return _get(
        f"statuses/{_seg(r.id)}/favourited_by", AccountListEntity, _limit(r.limit)
    )


@_route.register
def _(r: PostStatus) -> _Route:
    body: dict[str, Any] = {}
    if r.status is not None:
        body["status"] = r.status
    if r.in_reply_to_id is not None:
        body["in_reply_to_id"] = r.in_reply_to_id
    if r.media_ids:
        body["media_ids"] = list(r.media_ids)
    if r.poll is not None:
        body["poll"] = {
            "options": list(r.poll.options),
            "expires_in": r.poll.expires_in,
            "multiple": r.poll.multiple,
            "hide_totals": r.poll.hide_totals,
        }
    if r.sensitive:
        body["sensitive"] = True
    if r.spoiler_text is not None:
        body["spoiler_text"] = r.spoiler_text
    if r.visibility is not None:
        body["visibility"] = r.visibility.value
    if r.scheduled_at is not None:
        body["scheduled_at"] = r.scheduled_at
    if r.language is not None:
        body["language"] = r.language
    if r.quote_of_id is not None:
        body["quote_of_id"] = r.quote_of_id
    if r.group_id is not None:
        body["group_id"] = r.group_id
    # A scheduled post comes back as a ScheduledStatus, not a Status
    tag = ScheduledStatusEntity if r.scheduled_at is not None else StatusEntity
    return _post("statuses", tag, json=body)


@_route.register
def _(r: DeleteStatus) -> _Route:
    return _delete(f"statuses/{_seg(r.id)}", NoEntity)


@_route.register
def _(r: PostReblogStatus) -> _Route:
    return _post(f"statuses/{_seg(r.id)}/reblog", StatusEntity)


@_route.register
def _(r: PostUnreblogStatus) -> _Route:
    return _post(f"statuses/{_seg(r.id)}/unreblog", StatusEntity)


@_route.register
def _(r: PostPinStatus) -> _Route:
    return _post(f"statuses/{_seg(r.id)}/pin", StatusEntity)


@_route.register
def _(r: PostUnpinStatus) -> _Route:
    return _post(f"statuses/{_seg(r.id)}/unpin", StatusEntity)


# ── Timelines ──


@_route.register
def _(r: GetHomeTimeline) -> _Route:
    return _get("timelines/home", StatusListEntity, _paging([], r.paging))


@_route.register
def _(r: GetConversations) -> _Route:
    return _get("conversations", ConversationListEntity, _paging([], r.paging))


@_route.register
def _(r: GetPublicTimeline) -> _Route:
    params: list = []
    _flag(params, "local", r.local)
    _flag(params, "only_media", r.only_media)
    _paging(params, r.paging)
    return _get("timelines/public", StatusListEntity, params)


@_route.register
def _(r: GetTagTimeline) -> _Route:
    params: list = []
    _flag(params, "local", r.local)
    _flag(params, "only_media", r.only_media)
    _paging(params, r.paging)
    return _get(f"timelines/tag/{_seg(r.hashtag)}", StatusListEntity, params)


@_route.register
def _(r: GetListTimeline) -> _Route:
    return _get(f"timelines/list/{_seg(r.list_id)}", StatusListEntity, _paging([], r.paging))


@_route.register
def _(r: GetGroupTimeline) -> _Route:
    return _get(
        f"timelines/group/{_seg(r.group_id)}", StatusListEntity, _paging([], r.paging)
    )


# ── Trends ──


@_route.register
def _(r: GetTrends) -> _Route:
    return _get("trends", TagListEntity)
