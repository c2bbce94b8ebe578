"""Tests for entity decoding and encoding."""

import copy
import json
import logging
from dataclasses import replace

import pytest

from mastodon_client.codec import (
    _CODECS,
    DECODE_PRIORITY,
    MAX_EMBED_DEPTH,
    decode_account,
    decode_activity,
    decode_attachment,
    decode_entity,
    decode_history,
    decode_notification,
    decode_relationship,
    decode_status,
    decode_tag,
    encode_account,
    encode_entity,
    encode_history,
    encode_notification,
    encode_status,
    entity_decoder,
)
from mastodon_client.errors import DecodeError
from mastodon_client.models import (
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


def _local_account(**overrides) -> Account:
    fields = dict(
        id="1",
        username="carol",
        acct="carol",
        display_name="Carol",
        created_at="2023-06-01T00:00:00.000Z",
        url="https://example.social/@carol",
        avatar="https://example.social/a.png",
        header="https://example.social/h.png",
    )
    fields.update(overrides)
    return Account(**fields)


def _local_status(**overrides) -> Status:
    fields = dict(
        id="100",
        uri="https://example.social/users/carol/statuses/100",
        created_at="2024-02-21T12:00:00.000Z",
        account=_local_account(),
        content="<p>Spotted a heron</p>",
        visibility=Visibility.PUBLIC,
    )
    fields.update(overrides)
    return Status(**fields)


_EMOJI = Emoji(
    shortcode="heron",
    url="https://example.social/emoji/heron.png",
    static_url="https://example.social/emoji/heron_static.png",
    visible_in_picker=True,
)

_TAG = Tag(
    name="birds",
    url="https://example.social/tags/birds",
    history=[History(day=1708473600, uses=12, accounts=5)],
)

_ATTACHMENTS = [
    Attachment(
        id="a1",
        type=AttachmentType.IMAGE,
        url="https://example.social/media/a1.jpg",
        meta=ImageMeta(
            original=MetaInfo(width=1920, height=1080, size="1920x1080", aspect=1.5),
            small=MetaInfo(width=400, height=225),
            focus=Focus(x=-0.42, y=0.25),
        ),
        description="A heron in the reeds",
        blurhash="UBL_:rOpGG-oBUNG,qRj2so|=eE1w^n4S5NH",
    ),
    Attachment(
        id="a2",
        type=AttachmentType.VIDEO,
        meta=VideoMeta(
            original=MetaInfo(
                width=640, height=480, frame_rate="30/1", duration=5.5, bitrate=1200
            ),
            length="0:00:05.50",
            duration=5.5,
            fps=30,
            audio_encode="aac",
            audio_bitrate="44100 Hz",
            audio_channels="stereo",
        ),
    ),
    Attachment(
        id="a3",
        type=AttachmentType.AUDIO,
        meta=AudioMeta(
            original=MetaInfo(duration=12.5, bitrate=128000),
            length="0:00:12.50",
            duration=12.5,
        ),
    ),
    Attachment(id="a4", type=AttachmentType.UNKNOWN, meta=UnknownMeta({"anything": [1, 2]})),
    Attachment(id="a5", type=Unknown("hologram"), meta=UnknownMeta({"layers": 3})),
]

_CARD = Card(
    url="https://birds.example/herons",
    title="Herons",
    description="All about herons",
    type=Unknown("article"),
    width=400,
    height=300,
)

_POLL = Poll(
    id="p1",
    options=[PollOption("Heron", 3), PollOption("Egret")],
    expires_at="2024-02-22T12:00:00.000Z",
    multiple=True,
    votes_count=3,
    emojis=[_EMOJI],
)

_GROUP = Group(id="g1", title="Birders", description="Birds", member_count=40)

_FULL_STATUS = _local_status(
    visibility=Unknown("local"),
    reblog=WrappedStatus(
        _local_status(
            id="99",
            account=_local_account(id="2", username="dave", acct="dave@birds.example"),
            quote=WrappedStatus(_local_status(id="98", visibility=Visibility.UNLISTED)),
            replies_count=3,
        )
    ),
    in_reply_to_id="97",
    in_reply_to_account_id="2",
    spoiler_text="birds",
    sensitive=True,
    language="en",
    media_attachments=_ATTACHMENTS,
    mentions=[Mention("2", "dave", "dave@birds.example", "https://birds.example/@dave")],
    tags=[_TAG],
    emojis=[_EMOJI],
    card=_CARD,
    poll=_POLL,
    application=Application("Elk", "https://elk.zone"),
    group=_GROUP,
)

_FULL_ACCOUNT = _local_account(
    note="<p>Birder</p>",
    locked=True,
    followers_count=1200,
    emojis=[_EMOJI],
    fields=[Field("Site", "birds.example", verified_at="2024-01-01T00:00:00.000Z")],
    moved=WrappedAccount(_local_account(id="2", username="carol2")),
    source=Source(
        note="Birder",
        privacy=Unknown("mutuals_only"),
        sensitive=True,
        language="en",
        fields=[Field("Site", "birds.example")],
    ),
)

_SCHEDULED = ScheduledStatus(
    id="s1",
    scheduled_at="2030-01-01T00:00:00.000Z",
    params=StatusParams(
        text="Later",
        visibility=Visibility.PRIVATE,
        media_ids=["a1"],
        spoiler_text="soon",
        scheduled_at="2030-01-01T00:00:00.000Z",
        application_id="7",
    ),
    media_attachments=_ATTACHMENTS[:1],
)

_RELATIONSHIP = Relationship(id="2", following=True, endorsed=True)

_LOCAL_ENTITIES = [
    pytest.param(AccountEntity(_FULL_ACCOUNT), id="account"),
    pytest.param(
        AccountListEntity(
            [_local_account(source=Source(privacy=Privacy.UNLISTED)), _FULL_ACCOUNT]
        ),
        id="account-list",
    ),
    pytest.param(
        ActivityListEntity([Activity(week=1708300800, statuses=10, logins=4, registrations=0)]),
        id="activity-list",
    ),
    pytest.param(AppEntity(App("cid", "secret", id="3", name="mastodon-client")), id="app"),
    pytest.param(ApplicationEntity(Application("Web")), id="application"),
    pytest.param(AttachmentEntity(_ATTACHMENTS[0]), id="attachment"),
    pytest.param(
        CardEntity(
            Card(
                url="https://birds.example/heron.jpg",
                title="Heron",
                description="",
                type=CardType.PHOTO,
                author_name="Dave",
                provider_name="Birds",
            )
        ),
        id="card",
    ),
    pytest.param(
        ContextEntity(Context(ancestors=[_local_status(id="1")], descendants=[_FULL_STATUS])),
        id="context",
    ),
    pytest.param(
        ConversationEntity(Conversation("c1", [_local_account()], _local_status(), unread=True)),
        id="conversation",
    ),
    pytest.param(ConversationListEntity([Conversation("c2", [])]), id="conversation-list"),
    pytest.param(EmojiListEntity([_EMOJI]), id="emoji-list"),
    pytest.param(ErrorEntity(Error("Record not found", "gone")), id="error"),
    pytest.param(
        FilterEntity(
            Filter("f1", "spoilers", [FilterContext.HOME, Unknown("explore")], whole_word=True)
        ),
        id="filter",
    ),
    pytest.param(FilterListEntity([Filter("f2", "x", [])]), id="filter-list"),
    pytest.param(GroupEntity(_GROUP), id="group"),
    pytest.param(GroupListEntity([_GROUP]), id="group-list"),
    pytest.param(
        GroupRelationshipEntity(GroupRelationship("g1", member=True, unread_count=2)),
        id="group-relationship",
    ),
    pytest.param(
        GroupRelationshipListEntity([GroupRelationship("g1", admin=True)]),
        id="group-relationship-list",
    ),
    pytest.param(
        InstanceEntity(
            Instance(
                uri="example.social",
                title="Example",
                description="A place for birders",
                email="admin@example.social",
                version="4.2.7",
                urls=Urls("wss://example.social"),
                stats=Stats(user_count=10, status_count=200, domain_count=3),
                languages=["en", "de"],
                contact_account=_local_account(),
                max_toot_chars=500,
                registrations=True,
            )
        ),
        id="instance",
    ),
    pytest.param(ListInfoEntity(ListInfo("l1", "Friends")), id="list"),
    pytest.param(ListInfoListEntity([ListInfo("l1", "Friends")]), id="list-list"),
    pytest.param(
        NotificationEntity(
            Notification(
                "n1",
                Unknown("severed_relationships"),
                "2024-02-21T12:00:00.000Z",
                _local_account(),
            )
        ),
        id="notification",
    ),
    pytest.param(
        NotificationListEntity(
            [
                Notification(
                    "n2",
                    NotificationType.MENTION,
                    "2024-02-21T12:00:00.000Z",
                    _local_account(),
                    _FULL_STATUS,
                )
            ]
        ),
        id="notification-list",
    ),
    pytest.param(PollEntity(_POLL), id="poll"),
    pytest.param(RelationshipEntity(_RELATIONSHIP), id="relationship"),
    pytest.param(RelationshipListEntity([_RELATIONSHIP]), id="relationship-list"),
    pytest.param(
        ResultsEntity(Results([_local_account()], [_FULL_STATUS], [_TAG])), id="results"
    ),
    pytest.param(ScheduledStatusEntity(_SCHEDULED), id="scheduled-status"),
    pytest.param(
        ScheduledStatusListEntity(
            [_SCHEDULED, ScheduledStatus("s2", "2030-01-02T00:00:00.000Z", StatusParams("Bare"))]
        ),
        id="scheduled-status-list",
    ),
    pytest.param(StatusEntity(_FULL_STATUS), id="status"),
    pytest.param(StatusListEntity([_local_status(), _FULL_STATUS]), id="status-list"),
    pytest.param(StringListEntity(["mastodon.social", "birds.example"]), id="string-list"),
    pytest.param(
        TagListEntity([_TAG, Tag("cats", "https://example.social/tags/cats")]), id="tag-list"
    ),
    pytest.param(ValueEntity({"anything": [1, "two", None]}), id="value"),
    pytest.param(NoEntity(), id="nothing"),
]


class TestDecodeStatus:
    def test_boost_with_attachment(self, status_json):
        status = decode_status(status_json)

        assert status.id == "111940028839495190"
        assert status.visibility is Visibility.PUBLIC
        assert status.reblogged is True
        assert status.reblog is not None

        boosted = status.reblog.status
        assert boosted.account.acct == "bob@birds.example"
        assert boosted.account.id == "42"  # numeric IDs become strings
        assert boosted.account.followers_count == 1200
        assert boosted.replies_count == 3
        assert boosted.application.name == "Web"
        assert boosted.tags[0].name == "birds"

        [attachment] = boosted.media_attachments
        assert attachment.type is AttachmentType.IMAGE
        assert isinstance(attachment.meta, ImageMeta)
        assert attachment.meta.original.width == 1920
        assert attachment.meta.focus.x == pytest.approx(-0.42)

    def test_missing_optional_fields_get_defaults(self, status_json):
        status = decode_status(status_json)
        account = status.account

        assert account.locked is False
        assert account.bot is False
        assert account.moved is None
        assert account.source is None
        assert status.pinned is False
        assert status.quote is None

    def test_missing_required_field_reports_path(self, status_json):
        del status_json["account"]["username"]

        with pytest.raises(DecodeError) as excinfo:
            decode_status(status_json)

        assert excinfo.value.path == ["account", "username"]
        assert "at $.account.username" in str(excinfo.value)

    def test_wrong_type_in_list_reports_index(self, status_json):
        status_json["reblog"]["media_attachments"][0]["id"] = ["nope"]

        with pytest.raises(DecodeError) as excinfo:
            decode_status(status_json)

        assert excinfo.value.path == ["reblog", "media_attachments", 0, "id"]

    def test_null_required_field_is_missing(self, status_json):
        status_json["content"] = None

        with pytest.raises(DecodeError, match="missing required field"):
            decode_status(status_json)

    def test_embedding_past_limit_is_dropped(self, status_json, caplog):
        inner = copy.deepcopy(status_json["reblog"])
        chain = inner
        for _ in range(MAX_EMBED_DEPTH + 1):
            chain = dict(copy.deepcopy(inner), reblog=chain)

        with caplog.at_level(logging.WARNING, logger="mastodon_client.codec"):
            status = decode_status(chain)

        depth = 0
        while status.reblog is not None:
            status = status.reblog.status
            depth += 1
        assert depth == MAX_EMBED_DEPTH
        assert "embedded" in caplog.text


class TestDecodeScalars:
    def test_counts_accept_strings_and_numbers(self):
        history = decode_history({"day": "1708473600", "uses": 5, "accounts": "2"})
        assert history == History(day=1708473600, uses=5, accounts=2)

    def test_non_numeric_count_string_fails(self):
        with pytest.raises(DecodeError, match="integer string"):
            decode_activity(
                {"week": "x", "statuses": "1", "logins": "1", "registrations": "0"}
            )

    def test_history_encodes_counts_as_strings(self):
        assert encode_history(History(day=1, uses=2, accounts=3)) == {
            "day": "1",
            "uses": "2",
            "accounts": "3",
        }

    def test_unknown_enum_survives(self, notification_json):
        notification_json["type"] = "severed_relationships"

        notification = decode_notification(notification_json)
        assert notification.type == Unknown("severed_relationships")

        rebuilt = encode_notification(replace(notification, raw=None))
        assert rebuilt["type"] == "severed_relationships"

    def test_known_enum(self, notification_json):
        notification = decode_notification(notification_json)
        assert notification.type is NotificationType.FAVOURITE
        assert notification.status is None

    def test_bare_string_tag(self):
        tag = decode_tag("cats")
        assert tag.name == "cats"
        assert tag.url == ""

    def test_relationship_needs_core_flags(self):
        with pytest.raises(DecodeError):
            decode_relationship({"id": "1", "following": True})

        relationship = decode_relationship(
            {
                "id": "1",
                "following": True,
                "followed_by": False,
                "blocking": False,
                "muting": False,
                "requested": False,
            }
        )
        assert relationship.endorsed is False


class TestAttachmentMeta:
    def test_video_meta(self):
        attachment = decode_attachment(
            {
                "id": "9",
                "type": "gifv",
                "meta": {"fps": 30, "length": "0:00:05.00", "duration": 5.0},
            }
        )
        assert isinstance(attachment.meta, VideoMeta)
        assert attachment.meta.fps == 30

    def test_unknown_type_keeps_meta_verbatim(self):
        meta = {"hologram": {"layers": 3}}
        attachment = decode_attachment({"id": "9", "type": "hologram", "meta": meta})

        assert attachment.type == Unknown("hologram")
        assert attachment.meta == UnknownMeta(meta)

    def test_meta_shape_follows_type(self):
        # An image-shaped meta on an audio attachment is still audio meta
        attachment = decode_attachment(
            {"id": "9", "type": "audio", "meta": {"original": {"duration": 12.5}}}
        )
        assert attachment.meta.original.duration == 12.5
        assert not isinstance(attachment.meta, ImageMeta)

    def test_wrong_meta_shape_fails(self):
        with pytest.raises(DecodeError) as excinfo:
            decode_attachment({"id": "9", "type": "video", "meta": {"fps": "fast"}})
        assert excinfo.value.path == ["meta", "fps"]


class TestEncode:
    def test_decoded_entity_encodes_to_original_json(self, status_json):
        status_json["reblog"]["some_future_field"] = {"kept": True}
        assert encode_status(decode_status(status_json)) == status_json

    def test_local_account_round_trip(self):
        account = _local_account(
            bot=True,
            following_count=7,
            moved=WrappedAccount(_local_account(id="2", username="carol2")),
        )
        assert decode_account(encode_account(account)) == account

    def test_raw_is_ignored_by_equality(self, account_json):
        decoded = decode_account(account_json)
        assert decoded.raw is account_json
        assert decoded == replace(decoded, raw=None)

    def test_encode_entity_uses_raw(self, instance_json):
        entity = decode_entity(instance_json)
        assert encode_entity(entity) == instance_json

    def test_encode_no_entity(self):
        assert encode_entity(NoEntity()) is None
        assert encode_entity(ValueEntity({"a": 1})) == {"a": 1}


class TestDecodeEntity:
    def test_string_list_wins_over_tag_list(self):
        assert decode_entity(["mastodon.social", "birds.example"]) == StringListEntity(
            ["mastodon.social", "birds.example"]
        )

    def test_empty_array_is_string_list(self):
        assert decode_entity([]) == StringListEntity([])

    def test_status_list(self, status_json):
        entity = decode_entity([status_json])
        assert isinstance(entity, StatusListEntity)
        assert entity.value[0].id == status_json["id"]

    @pytest.mark.parametrize(
        "value, tag",
        [
            ({"id": "1", "title": "Friends"}, ListInfoEntity),
            ({"id": "1", "title": "Birders", "description": "Birds"}, GroupEntity),
            (
                {
                    "id": "1",
                    "following": False,
                    "followed_by": True,
                    "blocking": False,
                    "muting": False,
                    "requested": False,
                },
                RelationshipEntity,
            ),
            ({"error": "Record not found"}, ErrorEntity),
            ({"something": "else"}, ValueEntity),
            (
                {"name": "birds", "url": "https://birds.example/tags/birds", "history": []},
                ValueEntity,
            ),
            ({"name": "Elk", "website": "https://elk.zone"}, ValueEntity),
        ],
    )
    def test_object_shapes(self, value, tag):
        assert isinstance(decode_entity(value), tag)

    def test_fixture_shapes(self, status_json, notification_json, account_json, instance_json, app_json):
        assert isinstance(decode_entity(status_json), StatusEntity)
        assert isinstance(decode_entity(notification_json), NotificationEntity)
        assert isinstance(decode_entity(account_json), AccountEntity)
        assert isinstance(decode_entity(instance_json), InstanceEntity)
        assert isinstance(decode_entity(app_json), AppEntity)

    def test_null_is_no_entity(self):
        assert decode_entity(None) == NoEntity()

    def test_scalar_is_value_entity(self):
        assert decode_entity(42) == ValueEntity(42)

    def test_priority_covers_every_tag_once(self):
        assert len(DECODE_PRIORITY) == len(set(DECODE_PRIORITY))
        assert set(DECODE_PRIORITY) == set(_CODECS) - {ApplicationEntity}

    def test_application_only_by_tag(self):
        value = {"name": "Elk", "website": "https://elk.zone"}
        entity = entity_decoder(ApplicationEntity)(value)
        assert entity.value.name == "Elk"
        assert entity.value.website == "https://elk.zone"

    def test_priority_order_is_stable(self):
        assert DECODE_PRIORITY[0] is StringListEntity
        assert DECODE_PRIORITY.index(GroupEntity) < DECODE_PRIORITY.index(ListInfoEntity)
        assert DECODE_PRIORITY.index(StatusEntity) < DECODE_PRIORITY.index(AccountEntity)


class TestLocalRoundTrip:
    """Entities built in code encode to JSON that decodes back to them."""

    @pytest.mark.parametrize("entity", _LOCAL_ENTITIES)
    def test_round_trip(self, entity):
        wire = json.loads(json.dumps(encode_entity(entity)))
        assert entity_decoder(type(entity))(wire) == entity

    def test_every_tag_is_covered(self):
        covered = {type(param.values[0]) for param in _LOCAL_ENTITIES}
        assert covered == set(_CODECS) | {ValueEntity, NoEntity}

    def test_string_counts_stay_strings(self):
        [activity] = encode_entity(
            ActivityListEntity([Activity(week=1, statuses=2, logins=3, registrations=4)])
        )
        assert activity == {
            "week": "1",
            "statuses": "2",
            "logins": "3",
            "registrations": "4",
        }

        [tag] = encode_entity(TagListEntity([_TAG]))
        assert tag["history"] == [{"day": "1708473600", "uses": "12", "accounts": "5"}]

    def test_unknown_enums_keep_their_text(self):
        status = encode_entity(StatusEntity(_FULL_STATUS))
        assert status["visibility"] == "local"
        assert status["card"]["type"] == "article"
        assert status["media_attachments"][4]["type"] == "hologram"
        assert status["media_attachments"][4]["meta"] == {"layers": 3}

        filter_json = encode_entity(
            FilterEntity(Filter("f1", "x", [FilterContext.HOME, Unknown("explore")]))
        )
        assert filter_json["context"] == ["home", "explore"]

    def test_wrapped_statuses_nest(self):
        status = encode_entity(StatusEntity(_FULL_STATUS))
        assert status["reblog"]["id"] == "99"
        assert status["reblog"]["quote"]["id"] == "98"
        assert status["reblog"]["quote"]["reblog"] is None
        assert status["quote"] is None
