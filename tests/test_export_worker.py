"""
Tests for writing exports to disk from the worker thread.
"""
import os

from docmark.core.errors import ExportError
from docmark.core.export import ExportResult, ExportWorker


class Recorder:
    def __init__(self):
        self.calls = []

    def __call__(self, *args):
        self.calls.append(args)


def _result(data=b"payload"):
    return ExportResult(data=data, mime_type="image/png", filename="x_annotated.png")


class TestExportWorker:
    """The run body is exercised on the calling thread."""

    def test_writes_file(self, tmp_path):
        output = tmp_path / "x_annotated.png"
        worker = ExportWorker(lambda: _result(), str(output))
        finished = Recorder()
        worker.finished_export.connect(finished)

        worker.run()

        assert output.read_bytes() == b"payload"
        assert finished.calls == [(True, "Saved x_annotated.png")]
        assert os.listdir(tmp_path) == ["x_annotated.png"]

    def test_replaces_existing_file(self, tmp_path):
        output = tmp_path / "x_annotated.png"
        output.write_bytes(b"old")

        ExportWorker(lambda: _result(b"new"), str(output)).run()

        assert output.read_bytes() == b"new"

    def test_failure_leaves_no_file(self, tmp_path):
        def job():
            raise ExportError("Failed to build the mail message.", "Try PNG instead.")

        output = tmp_path / "x_annotated.eml"
        worker = ExportWorker(job, str(output))
        finished = Recorder()
        worker.finished_export.connect(finished)

        worker.run()

        assert not output.exists()
        assert os.listdir(tmp_path) == []
        assert finished.calls == [(False, "Failed to build the mail message. Try PNG instead.")]
        assert isinstance(worker.error, ExportError)

    def test_unexpected_error_reported(self, tmp_path):
        def job():
            raise RuntimeError("boom")

        worker = ExportWorker(job, str(tmp_path / "out.png"))
        finished = Recorder()
        worker.finished_export.connect(finished)

        worker.run()

        success, message = finished.calls[0]
        assert not success
        assert "boom" in message

    def test_cancelled_before_write(self, tmp_path):
        output = tmp_path / "x_annotated.png"
        worker = ExportWorker(lambda: _result(), str(output), generation=3)
        finished = Recorder()
        worker.finished_export.connect(finished)

        worker.cancel()
        worker.run()

        assert worker.cancelled
        assert worker.generation == 3
        assert not output.exists()
        assert finished.calls == [(False, "Export cancelled.")]
