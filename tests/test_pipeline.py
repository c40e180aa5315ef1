"""
Tests for the coordinator and the end-to-end pipeline.
"""

import json
import logging
import threading

import pytest

from mdprompt.config import PipelineConfig
from mdprompt.errors import ProducerFault, TraversalError, WriteError
from mdprompt.ingesters import FolderIngester
from mdprompt.models import Record
from mdprompt.pipeline import Channel, Coordinator, PipelineState, run_pipeline
from mdprompt.transformers import ChatRequestTransformer
from mdprompt.writers import JsonFileWriter
from tests.conftest import write_damaged_zip, write_tree


def producer_threads():
    return [t for t in threading.enumerate() if t.name == "mdprompt-producer"]


class ListIngester:
    """Yields prepared records, then optionally fails."""

    source_type = "list"

    def __init__(self, records, fail_with=None):
        self.records = records
        self.fail_with = fail_with
        self.yielded = 0
        self.closed = False

    def can_handle(self, source):
        return True

    def ingest(self, source):
        try:
            for record in self.records:
                self.yielded += 1
                yield record
            if self.fail_with is not None:
                raise self.fail_with
        finally:
            self.closed = True


class FailingWriter:
    """Writer that refuses every payload."""

    def write(self, record, payload):
        raise WriteError(f"{record.name}.json", "disk full")


class TestRunPipeline:
    """End-to-end runs over a folder."""

    def test_markdown_and_text_scenario(self, in_dir, out_dir):
        write_tree(in_dir, {"a.md": "hello", "b.txt": "ignored"})

        result = run_pipeline(PipelineConfig(input_dir=in_dir, output_dir=out_dir))

        assert sorted(p.name for p in out_dir.iterdir()) == ["a.json"]
        assert result.written == [out_dir / "a.json"]
        payload = json.loads((out_dir / "a.json").read_text(encoding="utf-8"))
        assert payload["options"]["num_ctx"] == 2048
        assert payload["messages"][1]["content"] == "Начало текста: hello\n\nКонец текста."

    def test_one_output_per_markdown_file(self, in_dir, out_dir):
        files = {f"dir{i % 3}/doc{i}.md": f"text {i}" for i in range(7)}
        files.update({"notes.txt": "x", "readme.MD": "y", "deep/er/data.json": "{}"})
        write_tree(in_dir, files)

        result = run_pipeline(PipelineConfig(input_dir=in_dir, output_dir=out_dir))

        assert result.count == 7
        assert sorted(p.name for p in out_dir.iterdir()) == sorted(f"doc{i}.json" for i in range(7))

    def test_rerun_is_byte_identical(self, in_dir, out_dir):
        write_tree(in_dir, {"a.md": "один", "b/c.md": "two <&> \"quoted\""})
        config = PipelineConfig(input_dir=in_dir, output_dir=out_dir)

        run_pipeline(config)
        first = {p.name: p.read_bytes() for p in out_dir.iterdir()}
        run_pipeline(config)
        second = {p.name: p.read_bytes() for p in out_dir.iterdir()}

        assert first == second

    def test_name_collisions_overwrite(self, in_dir, out_dir):
        write_tree(in_dir, {"x/same.md": "first", "y/same.md": "second"})

        result = run_pipeline(PipelineConfig(input_dir=in_dir, output_dir=out_dir))

        assert result.count == 2
        assert [p.name for p in out_dir.iterdir()] == ["same.json"]

    def test_missing_input_is_fatal(self, tmp_path, out_dir):
        with pytest.raises(TraversalError):
            run_pipeline(PipelineConfig(input_dir=tmp_path / "IN", output_dir=out_dir))

        assert list(out_dir.iterdir()) == []
        assert producer_threads() == []

    def test_unreadable_file_is_skipped(self, in_dir, out_dir, deny_read, caplog):
        write_tree(in_dir, {f"doc{i}.md": f"text {i}" for i in range(10)})
        deny_read("doc4.md")

        with caplog.at_level(logging.WARNING):
            result = run_pipeline(PipelineConfig(input_dir=in_dir, output_dir=out_dir))

        assert result.count == 9
        assert not (out_dir / "doc4.json").exists()
        skips = [r for r in caplog.records if r.getMessage().startswith("Skipping")]
        assert len(skips) == 1

    def test_missing_output_dir_is_fatal(self, in_dir, tmp_path):
        write_tree(in_dir, {"a.md": "x", "b.md": "y"})

        with pytest.raises(WriteError):
            run_pipeline(PipelineConfig(input_dir=in_dir, output_dir=tmp_path / "missing"))

        assert producer_threads() == []

    def test_damaged_zip_member_does_not_abort(self, tmp_path, out_dir):
        archive = write_damaged_zip(
            tmp_path / "docs.zip",
            damaged={"bad.md": "scrambled text " * 200},
            intact={"good.md": "fine"},
        )

        result = run_pipeline(PipelineConfig(input_dir=archive, output_dir=out_dir))

        assert result.written == [out_dir / "good.json"]

    def test_create_output(self, in_dir, tmp_path):
        write_tree(in_dir, {"a.md": "x"})
        out = tmp_path / "made" / "OUT"

        run_pipeline(PipelineConfig(input_dir=in_dir, output_dir=out, create_output=True))

        assert (out / "a.json").exists()


class TestCoordinator:
    """Channel coordination between producer and consumer."""

    def make(self, ingester, out_dir, writer=None):
        return Coordinator(
            ingester=ingester,
            transformer=ChatRequestTransformer(),
            writer=writer or JsonFileWriter(out_dir),
        )

    def test_reaches_done(self, in_dir, out_dir):
        write_tree(in_dir, {"a.md": "x"})
        coordinator = self.make(FolderIngester(), out_dir)

        coordinator.run(in_dir)

        assert coordinator.state is PipelineState.DONE

    def test_empty_source(self, in_dir, out_dir):
        in_dir.mkdir()
        coordinator = self.make(FolderIngester(), out_dir)

        result = coordinator.run(in_dir)

        assert result.count == 0
        assert coordinator.state is PipelineState.DONE

    def test_producer_fault_is_reported(self, out_dir):
        ingester = ListIngester([Record("a", "x")], fail_with=RuntimeError("walk exploded"))
        coordinator = self.make(ingester, out_dir)

        with pytest.raises(ProducerFault, match="walk exploded") as excinfo:
            coordinator.run(out_dir)

        assert isinstance(excinfo.value.cause, RuntimeError)
        assert (out_dir / "a.json").exists()
        assert ingester.closed

    def test_non_exception_fault_is_reported(self, out_dir):
        class Abort(BaseException):
            pass

        ingester = ListIngester([Record("a", "x")], fail_with=Abort("stop now"))
        coordinator = self.make(ingester, out_dir)

        with pytest.raises(ProducerFault, match="stop now") as excinfo:
            coordinator.run(out_dir)

        assert isinstance(excinfo.value.cause, Abort)
        assert coordinator.state is not PipelineState.DONE
        assert producer_threads() == []

    def test_consumer_failure_cancels_producer(self, out_dir):
        records = [Record(f"r{i}", "x") for i in range(50)]
        ingester = ListIngester(records)
        coordinator = self.make(ingester, out_dir, writer=FailingWriter())

        with pytest.raises(WriteError, match="disk full"):
            coordinator.run(out_dir)

        assert ingester.closed
        assert ingester.yielded <= 2
        assert producer_threads() == []

    def test_producer_stays_one_record_ahead(self, out_dir):
        ingester = ListIngester([Record(f"r{i}", "x") for i in range(5)])
        seen = []

        class RecordingWriter(JsonFileWriter):
            def write(self, record, payload):
                seen.append((record.name, ingester.yielded))
                return super().write(record, payload)

        self.make(ingester, out_dir, writer=RecordingWriter(out_dir)).run(out_dir)

        assert [name for name, _ in seen] == [f"r{i}" for i in range(5)]
        assert all(yielded <= i + 2 for i, (_, yielded) in enumerate(seen))


class TestErrorReporting:
    """What happens to a producer error that cannot be delivered."""

    def channels(self):
        cond = threading.Condition()
        return Channel(0, cond), Channel(1, cond)

    def test_delivered_to_open_channel(self):
        data, errors = self.channels()
        error = TraversalError("IN", "gone")

        Coordinator._report(data, errors, error)

        assert errors.recv(timeout=1) == (error, True)

    def test_full_channel_logs_and_drops(self, caplog):
        data, errors = self.channels()
        errors.offer(TraversalError("IN", "first"))

        with caplog.at_level(logging.ERROR):
            Coordinator._report(data, errors, TraversalError("IN", "second"))

        assert "Dropped producer error" in caplog.text
        assert "second" in caplog.text
        assert "first" in str(errors.recv(timeout=1)[0])

    def test_closed_channel_logs_and_drops(self, caplog):
        data, errors = self.channels()
        errors.close()

        with caplog.at_level(logging.ERROR):
            Coordinator._report(data, errors, TraversalError("IN", "late"))

        assert "Dropped producer error" in caplog.text

    def test_after_consumer_abort_logs_at_debug(self, caplog):
        data, errors = self.channels()
        data.cancel()

        with caplog.at_level(logging.DEBUG, logger="mdprompt.pipeline.coordinator"):
            Coordinator._report(data, errors, TraversalError("IN", "too late"))

        messages = [(r.levelno, r.getMessage()) for r in caplog.records]
        assert any(level == logging.DEBUG and "too late" in msg for level, msg in messages)
        assert not any(level >= logging.ERROR for level, _ in messages)
        assert errors.offer(TraversalError("IN", "slot still free")) is True
