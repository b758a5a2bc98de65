"""Tests for the FileComparator class."""

import os
import time

import pytest
from conftest import make_file, touch

from audiomirror.job import SyncJob
from audiomirror.sync.comparator import FileComparator, SyncAction
from audiomirror.sync.scanner import FileEntry


def entry_for(source, relative_path):
    return FileEntry.from_path(source / relative_path, source)


class TestTranscodeCandidates:
    """Files matching the pattern are compared with their transcode target."""

    @pytest.fixture
    def comparator(self, source, dest, lockfile):
        return FileComparator(SyncJob.from_options(source, dest, lockfile=lockfile))

    def test_missing_target_transcodes(self, comparator, source, dest):
        make_file(source, "album/track.flac")

        decision = comparator.decide(entry_for(source, "album/track.flac"))

        assert decision.action == SyncAction.TRANSCODE
        assert decision.reason == "No transcoded file"
        assert decision.target == dest / "album" / "track.ogg"

    def test_newer_source_transcodes(self, comparator, source, dest):
        src = make_file(source, "track.flac", age=10)
        make_file(dest, "track.ogg", age=100)

        decision = comparator.decide(entry_for(source, "track.flac"))

        assert decision.action == SyncAction.TRANSCODE
        assert decision.reason == "Source is newer than transcoded file"
        assert src.stat().st_mtime > (dest / "track.ogg").stat().st_mtime

    def test_up_to_date_target_skips(self, comparator, source, dest):
        make_file(source, "track.flac", age=100)
        make_file(dest, "track.ogg", age=10)

        decision = comparator.decide(entry_for(source, "track.flac"))

        assert decision.action == SyncAction.SKIP
        assert decision.reason == "Transcoded file is up to date"

    def test_equal_mtime_skips(self, comparator, source, dest):
        """Only a strictly newer source is re-transcoded."""
        src = make_file(source, "track.flac")
        target = make_file(dest, "track.ogg")
        stamp = time.time() - 50
        os.utime(src, (stamp, stamp))
        os.utime(target, (stamp, stamp))

        decision = comparator.decide(entry_for(source, "track.flac"))

        assert decision.action == SyncAction.SKIP

    def test_mp3_target_extension(self, source, dest, lockfile):
        job = SyncJob.from_options(source, dest, output_format="mp3", lockfile=lockfile)
        make_file(source, "a/b.flac")

        decision = FileComparator(job).decide(entry_for(source, "a/b.flac"))

        assert decision.target == dest / "a" / "b.mp3"

    def test_mirrored_flac_name_does_not_count(self, comparator, source, dest):
        """Only the transcode target is checked, not a same-named .flac."""
        make_file(source, "track.flac")
        make_file(dest, "track.flac")

        decision = comparator.decide(entry_for(source, "track.flac"))

        assert decision.action == SyncAction.TRANSCODE


class TestLinkCandidates:
    """Files not matching the pattern are linked when missing."""

    @pytest.fixture
    def comparator(self, source, dest, lockfile):
        return FileComparator(SyncJob.from_options(source, dest, lockfile=lockfile))

    def test_missing_target_links(self, comparator, source, dest):
        make_file(source, "cover.jpg")

        decision = comparator.decide(entry_for(source, "cover.jpg"))

        assert decision.action == SyncAction.LINK
        assert decision.target == dest / "cover.jpg"

    def test_existing_target_skips_even_if_older(self, comparator, source, dest):
        """Link candidates are never compared by mtime."""
        make_file(dest, "cover.jpg", age=1000)
        src = make_file(source, "cover.jpg")
        touch(src, offset=100)

        decision = comparator.decide(entry_for(source, "cover.jpg"))

        assert decision.action == SyncAction.SKIP
        assert decision.reason == "Destination already exists"

    def test_dangling_symlink_target_skips(self, comparator, source, dest):
        make_file(source, "cover.jpg")
        (dest / "cover.jpg").symlink_to(dest / "missing")

        decision = comparator.decide(entry_for(source, "cover.jpg"))

        assert decision.action == SyncAction.SKIP

    def test_pattern_is_case_sensitive(self, comparator, source, dest):
        make_file(source, "LOUD.FLAC")

        decision = comparator.decide(entry_for(source, "LOUD.FLAC"))

        assert decision.action == SyncAction.LINK


class TestCustomPattern:
    """The pattern is searched against the full source path."""

    def test_pattern_matches_directory_component(self, source, dest, lockfile):
        job = SyncJob.from_options(
            source, dest, transcode_pattern=r"/lossless/", lockfile=lockfile
        )
        make_file(source, "lossless/take.wav")
        make_file(source, "lossy/take.wav")
        comparator = FileComparator(job)

        lossless = comparator.decide(entry_for(source, "lossless/take.wav"))
        lossy = comparator.decide(entry_for(source, "lossy/take.wav"))

        assert lossless.action == SyncAction.TRANSCODE
        assert lossless.target == dest / "lossless" / "take.wav.ogg"
        assert lossy.action == SyncAction.LINK
        assert lossy.target == dest / "lossy" / "take.wav"

    def test_case_insensitive_pattern_maps_extension(self, source, dest, lockfile):
        job = SyncJob.from_options(
            source, dest, transcode_pattern=r"(?i)\.flac$", lockfile=lockfile
        )
        make_file(source, "LOUD.FLAC")

        decision = FileComparator(job).decide(entry_for(source, "LOUD.FLAC"))

        assert decision.action == SyncAction.TRANSCODE
        assert decision.target == dest / "LOUD.ogg"
