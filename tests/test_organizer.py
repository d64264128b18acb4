"""Tests for the draft organizer."""

import asyncio

import pytest

from clipfolio.clips.schemas import AspectRatio, ClipPatch
from clipfolio.common.errors import DraftValidationError, GatewayError, NotFoundError, ValidationErrorKind
from clipfolio.organizer.schemas import FailureReason
from clipfolio.organizer.service import DraftOrganizer
from tests.factories import clip_draft, video_draft
from tests.gateways import SteppingGateway

pytestmark = pytest.mark.anyio


async def _video(organizer, duration=120):
    return await organizer.register_video(video_draft(duration=duration))


async def _clips(organizer, count, **overrides):
    video = await _video(organizer)
    return [
        await organizer.create_clip(video.id, clip_draft(title=f"Clip {i}", **overrides))
        for i in range(count)
    ]


class TestLoad:
    async def test_loads_everything_from_gateway(self, gateway):
        video = await gateway.insert_video(video_draft())
        folder = await gateway.insert_folder("Intro Cuts")

        organizer = DraftOrganizer(gateway)
        await organizer.load()

        assert [v.id for v in organizer.videos] == [video.id]
        assert [f.id for f in organizer.folders] == [folder.id]
        assert organizer.clips == ()

    async def test_reload_resets_ephemeral_state(self, organizer):
        [clip] = await _clips(organizer, 1)
        folder = await organizer.create_folder("Intro")
        organizer.toggle_select(clip.id)
        organizer.toggle_expanded(folder.id)

        await organizer.load()

        assert organizer.selected_ids == []
        assert organizer.expanded_folder_ids == frozenset()
        assert [c.id for c in organizer.clips] == [clip.id]

    async def test_failed_load_keeps_state(self, organizer, gateway):
        await _clips(organizer, 2)
        gateway.fail_next()

        with pytest.raises(GatewayError):
            await organizer.load()

        assert len(organizer.clips) == 2


class TestSelection:
    async def test_toggle_is_symmetric(self, organizer):
        assert organizer.toggle_select("c1") is True
        assert organizer.is_selected("c1")
        assert organizer.toggle_select("c1") is False
        assert organizer.selected_ids == []

    async def test_keeps_selection_order(self, organizer):
        for clip_id in ["c2", "c1", "c3"]:
            organizer.toggle_select(clip_id)
        assert organizer.selected_ids == ["c2", "c1", "c3"]

    async def test_clear(self, organizer):
        organizer.toggle_select("c1")
        organizer.toggle_select("c2")
        organizer.clear_selection()
        assert organizer.selected_ids == []


class TestFolders:
    async def test_create_trims_name(self, organizer):
        folder = await organizer.create_folder("  Intro Cuts ")
        assert folder.name == "Intro Cuts"
        assert organizer.folders == [folder]

    async def test_create_blank_never_reaches_gateway(self, organizer, gateway):
        with pytest.raises(DraftValidationError) as exc_info:
            await organizer.create_folder("   ")
        assert exc_info.value.kind == ValidationErrorKind.EMPTY_NAME
        assert "insert_folder" not in gateway.calls

    async def test_rename(self, organizer, gateway):
        folder = await organizer.create_folder("Old")
        renamed = await organizer.rename_folder(folder.id, "New")
        assert renamed.name == "New"
        assert [f.name for f in await gateway.list_folders()] == ["New"]

    async def test_rename_unknown(self, organizer):
        with pytest.raises(NotFoundError):
            await organizer.rename_folder("missing", "New")

    async def test_rename_failure_keeps_name(self, organizer, gateway):
        folder = await organizer.create_folder("Old")
        gateway.fail_next()
        with pytest.raises(GatewayError):
            await organizer.rename_folder(folder.id, "New")
        assert organizer.get_folder(folder.id).name == "Old"

    async def test_folders_newest_first(self, organizer):
        first = await organizer.create_folder("First")
        second = await organizer.create_folder("Second")
        assert [f.id for f in organizer.folders] == [second.id, first.id]

    async def test_delete_unassigns_clips_without_deleting_them(self, organizer, gateway):
        c1, c2, c3 = await _clips(organizer, 3)
        folder = await organizer.create_folder("Intro")
        await organizer.move_to_folder([c1.id, c2.id], folder.id)

        detached = await organizer.delete_folder(folder.id)

        assert sorted(detached) == sorted([c1.id, c2.id])
        assert organizer.get_clip(c1.id).folder_id is None
        assert organizer.get_clip(c2.id).folder_id is None
        assert organizer.folders == []
        assert await gateway.list_folders() == []
        stored = {c.id: c for c in await gateway.list_clips()}
        assert set(stored) == {c1.id, c2.id, c3.id}
        assert stored[c1.id].folder_id is None

    async def test_delete_unknown(self, organizer):
        with pytest.raises(NotFoundError):
            await organizer.delete_folder("missing")

    async def test_failed_delete_keeps_folder_and_assignments(self, organizer, gateway):
        [clip] = await _clips(organizer, 1)
        folder = await organizer.create_folder("Intro")
        await organizer.move_to_folder([clip.id], folder.id)
        gateway.fail_next()

        with pytest.raises(GatewayError):
            await organizer.delete_folder(folder.id)

        assert organizer.get_folder(folder.id) == folder
        assert organizer.get_clip(clip.id).folder_id == folder.id

    async def test_delete_collapses_folder(self, organizer):
        folder = await organizer.create_folder("Intro")
        organizer.toggle_expanded(folder.id)
        await organizer.delete_folder(folder.id)
        assert folder.id not in organizer.expanded_folder_ids


class TestCreateClip:
    async def test_prepends_new_clip(self, organizer):
        video = await _video(organizer)
        first = await organizer.create_clip(video.id, clip_draft(title="First"))
        second = await organizer.create_clip(video.id, clip_draft(title="Second"))
        assert [c.id for c in organizer.clips] == [second.id, first.id]

    async def test_unknown_video(self, organizer):
        with pytest.raises(NotFoundError):
            await organizer.create_clip("missing", clip_draft())

    async def test_invalid_range_never_reaches_gateway(self, organizer, gateway):
        video = await _video(organizer, duration=20)
        with pytest.raises(DraftValidationError) as exc_info:
            await organizer.create_clip(video.id, clip_draft())
        assert exc_info.value.kind == ValidationErrorKind.OUT_OF_BOUNDS
        assert "insert_clip" not in gateway.calls

    async def test_unknown_folder(self, organizer):
        video = await _video(organizer)
        with pytest.raises(NotFoundError):
            await organizer.create_clip(video.id, clip_draft(folder_id="missing"))

    async def test_gateway_failure_adds_nothing(self, organizer, gateway):
        video = await _video(organizer)
        gateway.fail_next()
        with pytest.raises(GatewayError):
            await organizer.create_clip(video.id, clip_draft())
        assert organizer.clips == ()


class TestMoveToFolder:
    async def test_assigns_and_reassigns(self, organizer):
        [clip] = await _clips(organizer, 1)
        intro = await organizer.create_folder("Intro")
        outro = await organizer.create_folder("Outro")

        await organizer.move_to_folder([clip.id], intro.id)
        assert organizer.get_clip(clip.id).folder_id == intro.id

        result = await organizer.move_to_folder([clip.id], outro.id)
        assert result.ok
        assert organizer.get_clip(clip.id).folder_id == outro.id

    async def test_unassign_with_none(self, organizer):
        [clip] = await _clips(organizer, 1)
        folder = await organizer.create_folder("Intro")
        await organizer.move_to_folder([clip.id], folder.id)

        await organizer.move_to_folder([clip.id], None)

        assert organizer.get_clip(clip.id).folder_id is None

    async def test_missing_folder_fails_every_id(self, organizer, gateway):
        c1, c2 = await _clips(organizer, 2)

        result = await organizer.move_to_folder([c1.id, c2.id], "missing")

        assert result.succeeded_ids == []
        assert result.failed == {
            c1.id: FailureReason.FOLDER_NOT_FOUND,
            c2.id: FailureReason.FOLDER_NOT_FOUND,
        }
        assert organizer.get_clip(c1.id).folder_id is None
        assert organizer.get_clip(c2.id).folder_id is None
        assert "update_clips_batch" not in gateway.calls

    async def test_unknown_clip_reported_others_applied(self, organizer):
        [clip] = await _clips(organizer, 1)
        folder = await organizer.create_folder("Intro")

        result = await organizer.move_to_folder([clip.id, "ghost"], folder.id)

        assert result.succeeded_ids == [clip.id]
        assert result.failed_ids == ["ghost"]
        assert organizer.get_clip(clip.id).folder_id == folder.id

    async def test_partial_gateway_failure(self, organizer, gateway):
        c1, c2 = await _clips(organizer, 2)
        folder = await organizer.create_folder("Intro")
        gateway.fail_ids(c2.id)

        result = await organizer.move_to_folder([c1.id, c2.id], folder.id)

        assert result.succeeded_ids == [c1.id]
        assert result.failed == {c2.id: FailureReason.STORAGE_ERROR}
        assert organizer.get_clip(c1.id).folder_id == folder.id
        assert organizer.get_clip(c2.id).folder_id is None

    async def test_whole_gateway_failure_changes_nothing(self, organizer, gateway):
        [clip] = await _clips(organizer, 1)
        folder = await organizer.create_folder("Intro")
        gateway.fail_next()

        with pytest.raises(GatewayError):
            await organizer.move_to_folder([clip.id], folder.id)

        assert organizer.get_clip(clip.id).folder_id is None

    async def test_duplicate_ids_sent_once(self, organizer):
        [clip] = await _clips(organizer, 1)
        folder = await organizer.create_folder("Intro")
        result = await organizer.move_to_folder([clip.id, clip.id], folder.id)
        assert result.succeeded_ids == [clip.id]

    async def test_empty_batch(self, organizer, gateway):
        result = await organizer.move_to_folder([], None)
        assert result.ok
        assert result.succeeded_ids == []
        assert "update_clips_batch" not in gateway.calls


class TestBatchUpdate:
    async def test_applies_patch_to_all(self, organizer):
        c1, c2 = await _clips(organizer, 2)
        patch = ClipPatch(aspect_ratio=AspectRatio.PORTRAIT_9_16, subtitle_enabled=False)

        result = await organizer.batch_update([c1.id, c2.id], patch)

        assert result.ok
        for clip_id in (c1.id, c2.id):
            clip = organizer.get_clip(clip_id)
            assert clip.aspect_ratio == AspectRatio.PORTRAIT_9_16
            assert clip.subtitle_enabled is False
            assert clip.title.startswith("Clip")

    async def test_range_validated_per_clip(self, organizer):
        long_video = await _video(organizer, duration=300)
        short_video = await _video(organizer, duration=60)
        long_clip = await organizer.create_clip(long_video.id, clip_draft())
        short_clip = await organizer.create_clip(short_video.id, clip_draft())

        result = await organizer.batch_update([long_clip.id, short_clip.id], ClipPatch(end_time=200))

        assert result.succeeded_ids == [long_clip.id]
        assert result.failed == {short_clip.id: FailureReason.INVALID_RANGE}
        assert organizer.get_clip(long_clip.id).end_time == 200
        assert organizer.get_clip(short_clip.id).end_time == 40

    async def test_range_uses_current_bound_for_missing_side(self, organizer):
        [clip] = await _clips(organizer, 1)
        result = await organizer.batch_update([clip.id], ClipPatch(start_time=50))
        assert result.failed == {clip.id: FailureReason.INVALID_RANGE}

    async def test_folder_move_skips_range_check(self, organizer):
        video = await _video(organizer, duration=0)
        clip = await organizer.create_clip(video.id, clip_draft(end_time=5000))
        folder = await organizer.create_folder("Long")
        result = await organizer.batch_update([clip.id], ClipPatch(folder_id=folder.id))
        assert result.ok

    async def test_blank_title_rejected_before_gateway(self, organizer, gateway):
        [clip] = await _clips(organizer, 1)
        with pytest.raises(DraftValidationError):
            await organizer.batch_update([clip.id], ClipPatch(title=" "))
        assert "update_clips_batch" not in gateway.calls

    async def test_empty_patch_rejected(self, organizer):
        with pytest.raises(ValueError):
            await organizer.batch_update(["c1"], ClipPatch())

    async def test_keeps_creation_time(self, organizer):
        [clip] = await _clips(organizer, 1)
        await organizer.batch_update([clip.id], ClipPatch(title="Renamed"))
        updated = organizer.get_clip(clip.id)
        assert updated.title == "Renamed"
        assert updated.created_at == clip.created_at

    async def test_local_timestamp_matches_storage(self, organizer, gateway):
        [clip] = await _clips(organizer, 1)
        await organizer.batch_update([clip.id], ClipPatch(subtitle_enabled=False))
        [stored] = await gateway.list_clips()
        assert organizer.get_clip(clip.id).updated_at == stored.updated_at
        assert stored.updated_at > clip.updated_at


class TestDeleteClips:
    async def test_deletes_and_deselects(self, organizer, gateway):
        c1, c2 = await _clips(organizer, 2)
        organizer.toggle_select(c1.id)
        organizer.toggle_select(c2.id)

        result = await organizer.delete_clips([c1.id])

        assert result.ok
        assert [c.id for c in organizer.clips] == [c2.id]
        assert organizer.selected_ids == [c2.id]
        assert [c.id for c in await gateway.list_clips()] == [c2.id]

    async def test_second_delete_reports_not_found(self, organizer, gateway):
        [clip] = await _clips(organizer, 1)

        first = await organizer.delete_clips([clip.id])
        calls_after_first = len(gateway.calls)
        second = await organizer.delete_clips([clip.id])

        assert first.succeeded_ids == [clip.id]
        assert second.failed == {clip.id: FailureReason.NOT_FOUND}
        assert len(gateway.calls) == calls_after_first

    async def test_partial_failure_keeps_failed_clip(self, organizer, gateway):
        c1, c2 = await _clips(organizer, 2)
        organizer.toggle_select(c2.id)
        gateway.fail_ids(c2.id)

        result = await organizer.delete_clips([c1.id, c2.id])

        assert result.succeeded_ids == [c1.id]
        assert result.failed_ids == [c2.id]
        assert [c.id for c in organizer.clips] == [c2.id]
        assert organizer.is_selected(c2.id)

    async def test_whole_failure_keeps_everything(self, organizer, gateway):
        clips = await _clips(organizer, 2)
        gateway.fail_next()
        with pytest.raises(GatewayError):
            await organizer.delete_clips([c.id for c in clips])
        assert len(organizer.clips) == 2

    async def test_remote_missing_clip_reported(self, organizer, gateway):
        [clip] = await _clips(organizer, 1)
        # Deleted by another session behind our back
        await gateway.delete_clips_batch([clip.id])

        result = await organizer.delete_clips([clip.id])

        assert result.failed == {clip.id: FailureReason.NOT_FOUND}
        assert organizer.get_clip(clip.id) == clip


class TestVideos:
    async def test_delete_video_cascades_to_clips(self, organizer, gateway):
        video = await _video(organizer)
        other = await _video(organizer)
        gone = await organizer.create_clip(video.id, clip_draft())
        kept = await organizer.create_clip(other.id, clip_draft())
        organizer.toggle_select(gone.id)

        removed = await organizer.delete_video(video.id)

        assert removed == [gone.id]
        assert [c.id for c in organizer.clips] == [kept.id]
        assert organizer.selected_ids == []
        assert [c.id for c in await gateway.list_clips()] == [kept.id]

    async def test_open_clip_targets_start(self, organizer):
        [clip] = await _clips(organizer, 1)
        target = organizer.open_clip(clip.id)
        assert target.video.id == clip.video_id
        assert target.start_time == 10
        assert target.end_time == 40

    async def test_open_clip_gone_after_remote_video_delete(self, organizer, gateway):
        [clip] = await _clips(organizer, 1)
        await gateway.delete_video(clip.video_id)
        await organizer.load()

        with pytest.raises(NotFoundError):
            organizer.open_clip(clip.id)


class TestPartition:
    async def test_every_clip_once(self, organizer):
        clips = await _clips(organizer, 4)
        folder = await organizer.create_folder("Intro")
        await organizer.move_to_folder([clips[0].id, clips[2].id], folder.id)

        partition = organizer.partition()

        assert {c.id for c in partition.clips_in(folder.id)} == {clips[0].id, clips[2].id}
        assert {c.id for c in partition.unorganized} == {clips[1].id, clips[3].id}
        assert len(partition.all_clips()) == 4


@pytest.fixture
def stepping():
    return SteppingGateway()


@pytest.fixture
def stepping_organizer(stepping):
    return DraftOrganizer(stepping)


async def _is_waiting(task):
    done, _ = await asyncio.wait({task}, timeout=0.05)
    return not done


class TestConcurrency:
    async def test_moves_of_same_clip_run_one_after_another(self, stepping_organizer, stepping):
        organizer = stepping_organizer
        [clip] = await _clips(organizer, 1)
        intro = await organizer.create_folder("Intro")
        outro = await organizer.create_folder("Outro")

        stepping.hold("update_clips_batch")
        first = asyncio.create_task(organizer.move_to_folder([clip.id], intro.id))
        await stepping.held.wait()
        second = asyncio.create_task(organizer.move_to_folder([clip.id], outro.id))

        assert await _is_waiting(second)
        stepping.release()
        await first
        await second

        [stored] = await stepping.list_clips()
        assert stored.folder_id == outro.id
        assert organizer.get_clip(clip.id).folder_id == outro.id

    async def test_video_delete_waits_for_clip_update(self, stepping_organizer, stepping):
        organizer = stepping_organizer
        [clip] = await _clips(organizer, 1)

        stepping.hold("update_clips_batch")
        update = asyncio.create_task(organizer.batch_update([clip.id], ClipPatch(title="Renamed")))
        await stepping.held.wait()
        delete = asyncio.create_task(organizer.delete_video(clip.video_id))

        assert await _is_waiting(delete)
        stepping.release()
        result = await update
        removed = await delete

        assert result.succeeded_ids == [clip.id]
        assert removed == [clip.id]
        assert organizer.clips == ()
        assert await stepping.list_clips() == []

    async def test_video_delete_includes_clip_created_meanwhile(self, stepping_organizer, stepping):
        organizer = stepping_organizer
        video = await _video(organizer)

        stepping.hold("insert_clip")
        create = asyncio.create_task(organizer.create_clip(video.id, clip_draft()))
        await stepping.held.wait()
        delete = asyncio.create_task(organizer.delete_video(video.id))

        assert await _is_waiting(delete)
        stepping.release()
        clip = await create
        removed = await delete

        assert removed == [clip.id]
        assert organizer.clips == ()

    async def test_folder_delete_waits_for_clip_insert(self, stepping_organizer, stepping):
        organizer = stepping_organizer
        video = await _video(organizer)
        folder = await organizer.create_folder("Intro")

        stepping.hold("insert_clip")
        create = asyncio.create_task(organizer.create_clip(video.id, clip_draft(folder_id=folder.id)))
        await stepping.held.wait()
        delete = asyncio.create_task(organizer.delete_folder(folder.id))

        assert await _is_waiting(delete)
        stepping.release()
        clip = await create
        detached = await delete

        assert detached == [clip.id]
        assert organizer.folders == []
        assert organizer.get_clip(clip.id).folder_id is None
        [stored] = await stepping.list_clips()
        assert stored.folder_id is None

    async def test_reload_during_update_reports_dropped_clip(self, stepping_organizer, stepping):
        organizer = stepping_organizer
        [clip] = await _clips(organizer, 1)

        stepping.hold("update_clips_batch")
        update = asyncio.create_task(organizer.batch_update([clip.id], ClipPatch(title="Renamed")))
        await stepping.held.wait()
        # Another session deletes the clip, then this one reloads
        await stepping.delete_clips_batch([clip.id])
        await organizer.load()
        stepping.release()
        result = await update

        assert result.failed == {clip.id: FailureReason.NOT_FOUND}
        assert organizer.clips == ()


async def test_intro_cuts_scenario(organizer):
    folder = await organizer.create_folder("Intro Cuts")
    video = await _video(organizer, duration=120)
    clip = await organizer.create_clip(video.id, clip_draft(start_time=10, end_time=40))
    assert [c.id for c in organizer.partition().unorganized] == [clip.id]

    result = await organizer.move_to_folder([clip.id], folder.id)

    assert result.ok
    partition = organizer.partition()
    assert [c.id for c in partition.clips_in(folder.id)] == [clip.id]
    assert partition.unorganized == []

    await organizer.delete_folder(folder.id)

    partition = organizer.partition()
    assert partition.by_folder == []
    assert [c.id for c in partition.unorganized] == [clip.id]
    assert organizer.get_clip(clip.id).folder_id is None
