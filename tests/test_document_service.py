"""DocumentService behaviour with a controlled clock."""

from datetime import datetime, timedelta

import pytest

from storyhub.errors import ForbiddenError, NotFoundError
from storyhub.models.document import Document
from storyhub.schemas.document import UNSET, DocumentPatch, ImageRef
from storyhub.services.document_service import DocumentService
from storyhub.utils.helpers import MAX_PAGE


class StepClock:
    def __init__(self, start=datetime(2026, 1, 1, 12, 0, 0)):
        self.now = start

    def __call__(self):
        self.now = self.now + timedelta(seconds=1)
        return self.now


@pytest.fixture
def service(db):
    return DocumentService(db, clock=StepClock())


def test_update_bumps_updated_at_even_for_empty_patch(service):
    doc = service.create_empty("u1")
    created = doc.updated_at

    updated = service.update(doc.id, "u1", DocumentPatch())
    assert updated.updated_at > created
    assert updated.created_at == created
    assert updated.title == "Untitled"


def test_update_replaces_editor_content_wholesale(service):
    doc = service.create_empty("u1")
    service.update(doc.id, "u1", DocumentPatch(editor_json={"a": {"b": 1}, "c": 2}))
    updated = service.update(doc.id, "u1", DocumentPatch(editor_json={"a": {"d": 3}}))
    assert updated.editor_json == {"a": {"d": 3}}

    cleared = service.update(doc.id, "u1", DocumentPatch(editor_json=None))
    assert cleared.editor_json is None


def test_update_stores_images_with_timestamp(service):
    doc = service.create_empty("u1")
    updated = service.update(doc.id, "u1", DocumentPatch(cover_image=ImageRef(url="https://x/y.png", timeStamp=9)))
    assert updated.cover_image == {"url": "https://x/y.png", "timeStamp": 9}


def test_update_errors_are_distinct(service):
    doc = service.create_empty("u1")
    with pytest.raises(NotFoundError):
        service.update("missing", "u1", DocumentPatch(title="x"))
    with pytest.raises(ForbiddenError):
        service.update(doc.id, "u2", DocumentPatch(title="x"))
    assert service.get(doc.id).title == "Untitled"


def test_unowned_document_can_be_claimed_once(db, service):
    stamp = datetime(2025, 6, 1)
    db.add(Document(id="orphan", owner_id="", title="Imported", created_at=stamp, updated_at=stamp))
    db.commit()

    claimed = service.update("orphan", "anyone", DocumentPatch(owner_id="u9"))
    assert claimed.owner_id == "u9"

    # once owned, the usual gate applies and the owner cannot be changed again
    with pytest.raises(ForbiddenError):
        service.update("orphan", "anyone", DocumentPatch(owner_id="u10"))
    again = service.update("orphan", "u9", DocumentPatch(owner_id="u10"))
    assert again.owner_id == "u9"


def test_publish_is_idempotent(service):
    doc = service.create_empty("u1")
    assert service.publish(doc.id, "u1").is_public is True
    assert service.publish(doc.id, "u1").is_public is True


def test_delete_returns_false_instead_of_raising(service):
    doc = service.create_empty("u1")
    assert service.delete("missing", "u1") is False
    assert service.delete(doc.id, "wrong-owner") is False
    assert service.get(doc.id).id == doc.id
    assert service.delete(doc.id, "u1") is True
    assert service.exists(doc.id) is False


def test_list_published_pages_are_disjoint_and_ordered(service):
    ids = []
    for _ in range(25):
        doc = service.create_empty("u1")
        service.publish(doc.id, "u1")
        ids.append(doc.id)
    service.create_empty("u1")  # private documents never show up

    first, total, page, size = service.list_published(1, 20)
    second, _, _, _ = service.list_published(2, 20)

    assert total == 25
    assert (page, size) == (1, 20)
    assert len(first) == 20
    assert len(second) == 5
    assert not {d.id for d in first} & {d.id for d in second}

    combined = first + second
    assert [d.id for d in combined] == list(reversed(ids))
    stamps = [d.updated_at for d in combined]
    assert stamps == sorted(stamps, reverse=True)


@pytest.mark.parametrize(
    "page, size, expected",
    [
        (None, None, (1, 20)),
        (0, 0, (1, 20)),
        (-3, -1, (1, 20)),
        (2, 500, (2, 100)),
        (3, 7, (3, 7)),
        (10**30, 20, (MAX_PAGE, 20)),
    ],
)
def test_list_published_clamps_pagination(service, page, size, expected):
    _, _, got_page, got_size = service.list_published(page, size)
    assert (got_page, got_size) == expected


def test_reassign_owner_moves_every_document(service):
    for _ in range(3):
        service.create_empty("visitor")
    service.create_empty("someone")

    assert service.reassign_owner("visitor", "member") == 3
    assert len(service.list_by_owner("member")) == 3
    assert service.list_by_owner("visitor") == []


def test_patch_from_payload_classifies_slots():
    patch = DocumentPatch.from_payload(
        {"title": "t", "iconImage": None, "coverImage": {"url": "u", "timeStamp": "bad"}, "other": 1}
    )
    assert patch.title == "t"
    assert patch.icon_image is None
    assert patch.cover_image == ImageRef(url="u", timeStamp=0)
    assert patch.owner_id is UNSET
    assert patch.editor_json is UNSET
    assert DocumentPatch.from_payload({}).is_empty()
