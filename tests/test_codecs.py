"""Unit tests for the CSV and JSON interchange formats."""

from __future__ import annotations

import csv
import json
import tempfile
import unittest
from pathlib import Path

from assetlog.codecs import csv_codec, json_codec
from assetlog.db import item_repo
from assetlog.db.errors import ImportFormatError, WriteError
from assetlog.models.item import Item
from tests.helpers import clock, make_db, sample_item

HEADER = "id,description,location,status,remarks\n"


class _TmpDirCase(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.dir = Path(self._tmp.name)

    def tearDown(self):
        self._tmp.cleanup()

    def write(self, name: str, text: str) -> Path:
        path = self.dir / name
        path.write_text(text, encoding="utf-8")
        return path


# ===========================================================================
# 1. CSV
# ===========================================================================

class TestCsvExport(_TmpDirCase):
    def test_header_and_rows(self):
        db = make_db()
        with db.transaction() as conn:
            item_repo.add_item(conn, sample_item(), clock())
            item_repo.append_remarks_entry(conn, 1001, "second line", clock())
        path = self.dir / "out.csv"
        self.assertEqual(csv_codec.export_csv(db.connection(), path), 1)
        db.close()

        with open(path, newline="", encoding="utf-8") as f:
            rows = list(csv.reader(f))
        self.assertEqual(rows[0], ["id", "description", "location", "status", "remarks"])
        self.assertEqual(rows[1][:4], ["1001", "UPS", "Rack 1", "Operational"])
        self.assertEqual(rows[1][4].count("\n"), 1)

    def test_unwritable_path(self):
        db = make_db()
        try:
            with self.assertRaises(WriteError) as ctx:
                csv_codec.export_csv(db.connection(), self.dir / "missing" / "out.csv")
        finally:
            db.close()
        self.assertIn("export csv", str(ctx.exception))

    def test_empty_store_writes_header_only(self):
        db = make_db()
        path = self.dir / "empty.csv"
        self.assertEqual(csv_codec.export_csv(db.connection(), path), 0)
        db.close()
        self.assertEqual(path.read_text(encoding="utf-8").strip(), HEADER.strip())


class TestCsvRead(_TmpDirCase):
    def test_reads_items(self):
        path = self.write("in.csv", HEADER + '1001,UPS,Rack 1,Operational,"[2025-01-01 10:00] a\nb"\n')
        items = csv_codec.read_csv(path)
        self.assertEqual(items, [Item(id=1001, description="UPS", location="Rack 1",
                                      status="Operational", remarks="[2025-01-01 10:00] a\nb")])

    def test_blank_id_means_new(self):
        items = csv_codec.read_csv(self.write("in.csv", HEADER + ",Fan,Rack 2,New,\n"))
        self.assertEqual(items[0].id, 0)

    def test_skips_blank_lines(self):
        items = csv_codec.read_csv(self.write("in.csv", HEADER + "\n7,a,b,c,d\n\n"))
        self.assertEqual([i.id for i in items], [7])

    def test_wrong_column_count(self):
        path = self.write("bad.csv", HEADER + "1,a,b,c,d\n2,a,b\n")
        with self.assertRaises(ImportFormatError) as ctx:
            csv_codec.read_csv(path)
        self.assertIn("line 3", str(ctx.exception))

    def test_bad_header(self):
        with self.assertRaises(ImportFormatError):
            csv_codec.read_csv(self.write("bad.csv", "1,a,b,c,d\n"))

    def test_empty_file(self):
        with self.assertRaises(ImportFormatError):
            csv_codec.read_csv(self.write("empty.csv", ""))

    def test_negative_id(self):
        with self.assertRaises(ImportFormatError) as ctx:
            csv_codec.read_csv(self.write("bad.csv", HEADER + "-5,neg,,,\n"))
        self.assertIn("line 2", str(ctx.exception))

    def test_spreadsheet_bom_header(self):
        path = self.dir / "bom.csv"
        path.write_bytes(("\ufeff" + HEADER + "7,a,b,c,d\n").encode("utf-8"))
        self.assertEqual([i.id for i in csv_codec.read_csv(path)], [7])

    def test_non_numeric_id(self):
        with self.assertRaises(ImportFormatError):
            csv_codec.read_csv(self.write("bad.csv", HEADER + "abc,a,b,c,d\n"))

    def test_missing_file(self):
        with self.assertRaises(ImportFormatError):
            csv_codec.read_csv(self.dir / "nope.csv")


# ===========================================================================
# 2. JSON
# ===========================================================================

class TestJsonCodec(_TmpDirCase):
    def test_export_shape(self):
        db = make_db()
        with db.transaction() as conn:
            item_repo.add_item(conn, sample_item(), clock())
        data = json.loads(json_codec.export_json_string(db.connection()))
        db.close()
        self.assertEqual(len(data), 1)
        self.assertEqual(sorted(data[0]), ["description", "id", "location", "remarks", "status"])
        self.assertEqual(data[0]["id"], 1001)

    def test_export_empty_is_array(self):
        db = make_db()
        self.assertEqual(json.loads(json_codec.export_json_string(db.connection())), [])
        db.close()

    def test_export_unwritable_path(self):
        db = make_db()
        try:
            with self.assertRaises(WriteError) as ctx:
                json_codec.export_json(db.connection(), self.dir / "missing" / "out.json")
        finally:
            db.close()
        self.assertIn("export json", str(ctx.exception))

    def test_parse_defaults_and_nulls(self):
        items = json_codec.parse_items('[{"description": "Fan", "status": null, "extra": 1}]')
        self.assertEqual(items, [Item(description="Fan")])

    def test_parse_rejects_non_array(self):
        with self.assertRaises(ImportFormatError):
            json_codec.parse_items('{"id": 1}')

    def test_parse_rejects_bad_json(self):
        with self.assertRaises(ImportFormatError):
            json_codec.parse_items("[{")

    def test_parse_rejects_negative_id(self):
        with self.assertRaises(ImportFormatError):
            json_codec.parse_items('[{"id": -4}]')

    def test_read_json_file(self):
        path = self.write("in.json", '[{"id": 5, "description": "x"}]')
        self.assertEqual(json_codec.read_json(path), [Item(id=5, description="x")])

    def test_view_json_pretty_prints(self):
        path = self.write("raw.json", '{"a":[1,2]}')
        self.assertEqual(json_codec.view_json(path), '{\n  "a": [\n    1,\n    2\n  ]\n}')

    def test_view_json_invalid(self):
        with self.assertRaises(ImportFormatError):
            json_codec.view_json(self.write("raw.json", "nope"))

    def test_single_item(self):
        item = Item(id=9, description="Rack PDU", location="Row A", status="OK",
                    remarks="[2025-01-01 00:00] fitted")
        raw = json_codec.item_to_json(item)
        self.assertEqual(json.loads(raw)["description"], "Rack PDU")
        self.assertEqual(json_codec.item_from_json(raw), item)

    def test_single_item_invalid(self):
        with self.assertRaises(ImportFormatError):
            json_codec.item_from_json('{"id": "nine"}')


if __name__ == "__main__":
    unittest.main()
