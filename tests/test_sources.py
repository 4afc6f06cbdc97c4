"""Tests for reading GEDCOM bytes from files and URLs."""

import httpx
import pytest

from gedlineage.errors import SourceError
from gedlineage.sources import EMPTY_INPUT_MESSAGE, download_gedcom, read_gedcom_file

URL = "https://example.com/trees/family.ged"


def _client(handler) -> httpx.Client:
    return httpx.Client(transport=httpx.MockTransport(handler))


class TestReadGedcomFile:
    def test_reads_bytes(self, minimal_ged) -> None:
        assert read_gedcom_file(minimal_ged).startswith(b"0 HEAD")

    def test_missing_file(self, tmp_path) -> None:
        with pytest.raises(SourceError, match=EMPTY_INPUT_MESSAGE):
            read_gedcom_file(tmp_path / "nope.ged")

    def test_empty_file(self, tmp_path) -> None:
        path = tmp_path / "empty.ged"
        path.write_bytes(b"")
        with pytest.raises(SourceError, match=EMPTY_INPUT_MESSAGE):
            read_gedcom_file(path)


class TestDownloadGedcom:
    def test_success(self) -> None:
        with _client(lambda request: httpx.Response(200, content=b"0 HEAD\n0 TRLR\n")) as client:
            assert download_gedcom(URL, client=client) == b"0 HEAD\n0 TRLR\n"

    def test_bad_status(self) -> None:
        with _client(lambda request: httpx.Response(404)) as client:
            with pytest.raises(SourceError, match="Failed to download GEDCOM file from URL: 404"):
                download_gedcom(URL, client=client)

    def test_empty_body(self) -> None:
        with _client(lambda request: httpx.Response(200, content=b"")) as client:
            with pytest.raises(SourceError, match=EMPTY_INPUT_MESSAGE):
                download_gedcom(URL, client=client)

    def test_transport_error(self) -> None:
        def refuse(request):
            raise httpx.ConnectError("connection refused", request=request)

        with _client(refuse) as client:
            with pytest.raises(SourceError, match="connection refused"):
                download_gedcom(URL, client=client)
