"""
Tests for fetching and unpacking add-on archives.
"""

import io
import zipfile

import pytest

from esoaddons.core.archive_extractor import ArchiveExtractor
from esoaddons.core.exceptions import DownloadError, InstallError
from esoaddons.core.installation_report import InstallationReport
from esoaddons.core.installer import AddonInstaller, archive_file_name
from esoaddons.core.link_resolver import LinkResolver
from esoaddons.model_types import AddonListEntry, InstallTarget

from helpers import FakeResp, Logger, landing_page, make_in_memory_zip


class StaticResolver(LinkResolver):
    def __init__(self, links):
        self.links = links

    def resolve(self, landing_page_url):
        return self.links.get(landing_page_url, "")


def test_fetch_writes_body(tmp_path, fake_web):
    fake_web.routes["https://x.test/a.zip"] = FakeResp(b"0123456789" * 2000)
    dest = tmp_path / "a.zip"
    dest.write_bytes(b"stale")
    AddonInstaller(Logger()).fetch("https://x.test/a.zip", dest)
    assert dest.read_bytes() == b"0123456789" * 2000


def test_fetch_empty_url_raises_download_error(tmp_path, fake_web):
    with pytest.raises(DownloadError):
        AddonInstaller(Logger()).fetch("", tmp_path / "a.zip")


def test_fetch_transport_error(tmp_path, fake_web):
    with pytest.raises(DownloadError):
        AddonInstaller(Logger()).fetch("https://down.test/a.zip", tmp_path / "a.zip")


def test_fetch_http_error(tmp_path, fake_web):
    fake_web.routes["https://x.test/missing.zip"] = FakeResp(status_code=404)
    with pytest.raises(DownloadError):
        AddonInstaller(Logger()).fetch("https://x.test/missing.zip", tmp_path / "a.zip")


def test_fetch_unwritable_destination(tmp_path, fake_web):
    fake_web.routes["https://x.test/a.zip"] = FakeResp(b"data")
    with pytest.raises(DownloadError):
        AddonInstaller(Logger()).fetch("https://x.test/a.zip", tmp_path / "no-such-dir" / "a.zip")


def test_extract_creates_destination(tmp_path):
    archive = tmp_path / "mod.zip"
    archive.write_bytes(make_in_memory_zip({"LibAddonMenu/LibAddonMenu.txt": "## Title: LAM"}))
    dest = tmp_path / "AddOns" / "nested"
    ArchiveExtractor(Logger()).extract(archive, dest)
    assert (dest / "LibAddonMenu" / "LibAddonMenu.txt").read_text() == "## Title: LAM"


def test_extract_is_idempotent(tmp_path):
    archive = tmp_path / "mod.zip"
    archive.write_bytes(make_in_memory_zip({"Mod/a.lua": "a", "Mod/sub/b.lua": "b"}))
    dest = tmp_path / "AddOns"
    extractor = ArchiveExtractor(Logger())

    extractor.extract(archive, dest)
    first = sorted((p.relative_to(dest), p.read_bytes()) for p in dest.rglob("*") if p.is_file())
    extractor.extract(archive, dest)
    second = sorted((p.relative_to(dest), p.read_bytes()) for p in dest.rglob("*") if p.is_file())

    assert first == second


def test_extract_overwrites_existing_files(tmp_path):
    archive = tmp_path / "mod.zip"
    archive.write_bytes(make_in_memory_zip({"Mod/a.lua": "new"}))
    dest = tmp_path / "AddOns"
    (dest / "Mod").mkdir(parents=True)
    (dest / "Mod" / "a.lua").write_text("old")
    (dest / "Mod" / "keep.lua").write_text("untouched")

    ArchiveExtractor(Logger()).extract(archive, dest)

    assert (dest / "Mod" / "a.lua").read_text() == "new"
    assert (dest / "Mod" / "keep.lua").read_text() == "untouched"


def test_extract_corrupted_archive(tmp_path):
    archive = tmp_path / "bad.zip"
    archive.write_bytes(b"<html>not a zip</html>")
    with pytest.raises(InstallError):
        ArchiveExtractor(Logger()).extract(archive, tmp_path / "AddOns")


def test_extract_missing_archive(tmp_path):
    with pytest.raises(InstallError):
        ArchiveExtractor(Logger()).extract(tmp_path / "nope.zip", tmp_path / "AddOns")


def make_unsupported_method_zip(files):
    # Stored zip whose headers claim Deflate64 (method 9), which zipfile can't read
    data = bytearray(make_in_memory_zip_stored(files))
    offset = 0
    while (offset := data.find(b"PK\x03\x04", offset)) != -1:
        data[offset + 8:offset + 10] = (9).to_bytes(2, "little")
        offset += 4
    offset = 0
    while (offset := data.find(b"PK\x01\x02", offset)) != -1:
        data[offset + 10:offset + 12] = (9).to_bytes(2, "little")
        offset += 4
    return bytes(data)


def make_in_memory_zip_stored(files):
    bio = io.BytesIO()
    with zipfile.ZipFile(bio, mode="w", compression=zipfile.ZIP_STORED) as zf:
        for name, content in files.items():
            zf.writestr(name, content)
    return bio.getvalue()


def test_extract_unsupported_compression_method(tmp_path):
    archive = tmp_path / "deflate64.zip"
    archive.write_bytes(make_unsupported_method_zip({"Mod/a.lua": "a"}))
    with pytest.raises(InstallError):
        ArchiveExtractor(Logger()).extract(archive, tmp_path / "AddOns")


def test_unsupported_archive_does_not_stop_batch(tmp_path, fake_web):
    fake_web.routes["https://cdn/a.zip"] = FakeResp(make_unsupported_method_zip({"A/a.lua": "a"}))
    fake_web.routes["https://cdn/b.zip"] = FakeResp(make_in_memory_zip({"B/b.lua": "b"}))
    resolver = StaticResolver({"https://landing/a": "https://cdn/a.zip", "https://landing/b": "https://cdn/b.zip"})
    logs = Logger()

    report = AddonInstaller(logs, link_resolver=resolver).install_addons(
        [AddonListEntry("A", "https://landing/a"), AddonListEntry("B", "https://landing/b")],
        tmp_path, tmp_path / "AddOns",
    )

    assert [e["addon"] for e in report.errors] == ["A"]
    assert [i["addon"] for i in report.installed] == ["B"]
    assert (tmp_path / "AddOns" / "B" / "b.lua").read_text() == "b"
    assert any("Failed to install add-on 'A'" in m for m in logs.errors())


def test_zip_slip_blocked(tmp_path):
    archive = tmp_path / "evil.zip"
    archive.write_bytes(make_in_memory_zip({"../evil.txt": "boom", "Mod/file.txt": "safe"}))
    dest = tmp_path / "AddOns"
    with pytest.raises(InstallError, match="Security"):
        ArchiveExtractor(Logger()).extract(archive, dest)
    assert not (tmp_path / "evil.txt").exists()
    assert not (dest / "Mod").exists()


def test_archive_file_name_is_sanitized():
    assert archive_file_name("LibAddonMenu") == "LibAddonMenu.zip"
    assert archive_file_name("../evil/name") == ".._evil_name.zip"


def test_install_target_success(tmp_path, fake_web):
    fake_web.routes["https://ttc.test/PriceTable"] = FakeResp(make_in_memory_zip({"PriceTable.lua": "x"}))
    target = InstallTarget("https://ttc.test/PriceTable", tmp_path / "ttc.zip", tmp_path / "TTC")
    AddonInstaller(Logger()).install_target(target)
    assert (tmp_path / "TTC" / "PriceTable.lua").exists()


def test_install_target_propagates_install_error(tmp_path, fake_web):
    fake_web.routes["https://ttc.test/PriceTable"] = FakeResp(b"maintenance page")
    target = InstallTarget("https://ttc.test/PriceTable", tmp_path / "ttc.zip", tmp_path / "TTC")
    with pytest.raises(InstallError):
        AddonInstaller(Logger()).install_target(target)


def test_install_addon_success(tmp_path, fake_web):
    zip_url = "https://cdn.esoui.com/downloads/file7/lam.zip"
    fake_web.routes["https://www.esoui.com/downloads/download7.html"] = FakeResp(text=landing_page(zip_url))
    fake_web.routes[zip_url] = FakeResp(make_in_memory_zip({"LibAddonMenu-2.0/LAM.txt": "x"}))
    scratch = tmp_path / "scratch"
    scratch.mkdir()
    report = InstallationReport()

    ok = AddonInstaller(Logger()).install_addon(
        AddonListEntry("LibAddonMenu", "https://www.esoui.com/downloads/download7.html"),
        scratch, tmp_path / "AddOns", report,
    )

    assert ok is True
    assert (scratch / "LibAddonMenu.zip").exists()
    assert (tmp_path / "AddOns" / "LibAddonMenu-2.0" / "LAM.txt").exists()
    assert report.installed == [{"addon": "LibAddonMenu", "files": 1}]


def test_install_addon_unresolved_link_is_download_error(tmp_path, fake_web):
    logs = Logger()
    report = InstallationReport()
    installer = AddonInstaller(logs, link_resolver=StaticResolver({}))

    ok = installer.install_addon(AddonListEntry("Gone", "https://landing/1"), tmp_path, tmp_path / "AddOns", report)

    assert ok is False
    assert any("Failed to download add-on 'Gone'" in m for m in logs.errors())
    assert report.errors[0]["addon"] == "Gone"


def test_install_addon_bad_archive_is_recovered(tmp_path, fake_web):
    fake_web.routes["https://cdn/x.zip"] = FakeResp(b"not a zip")
    logs = Logger()
    installer = AddonInstaller(logs, link_resolver=StaticResolver({"https://landing/x": "https://cdn/x.zip"}))

    ok = installer.install_addon(AddonListEntry("X", "https://landing/x"), tmp_path, tmp_path / "AddOns")

    assert ok is False
    assert logs.errors() == ["✗ Failed to install add-on 'X': 'X.zip' is not a valid zip archive"]


def test_install_addons_continues_after_failure(tmp_path, fake_web):
    fake_web.routes["https://cdn/b.zip"] = FakeResp(make_in_memory_zip({"B/b.txt": "b"}))
    resolver = StaticResolver({"https://landing/a": "https://cdn/a.zip", "https://landing/b": "https://cdn/b.zip"})
    installer = AddonInstaller(Logger(), link_resolver=resolver)

    report = installer.install_addons(
        [AddonListEntry("A", "https://landing/a"), AddonListEntry("B", "https://landing/b")],
        tmp_path, tmp_path / "AddOns",
    )

    assert [e["addon"] for e in report.errors] == ["A"]
    assert [i["addon"] for i in report.installed] == ["B"]
    assert fake_web.calls == ["https://cdn/a.zip", "https://cdn/b.zip"]
    assert report.get_total_processed() == 2


def test_unresolvable_landing_page_gives_one_error_line(tmp_path, fake_web):
    fake_web.routes["https://www.esoui.com/changed"] = FakeResp(text="<html>new layout</html>")
    logs = Logger()
    report = InstallationReport()

    ok = AddonInstaller(logs).install_addon(
        AddonListEntry("Moved", "https://www.esoui.com/changed"), tmp_path, tmp_path / "AddOns", report
    )

    assert ok is False
    assert len(logs.errors()) == 1
    assert "Failed to download add-on 'Moved'" in logs.errors()[0]
    assert any("No download link found" in m for m in logs.warning_messages)
    assert len(report.errors) == 1
