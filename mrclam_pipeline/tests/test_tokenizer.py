import io
import unittest
from pathlib import Path

from mrclam_pipeline.errors import FileOpenError, MalformedFieldError
from mrclam_pipeline.tokenizer import Record, RecordTokenizer, open_data_file


class TestRecordTokenizer(unittest.TestCase):
    def setUp(self):
        self.tok = RecordTokenizer()

    def test_comment_line_skipped(self):
        self.assertIsNone(self.tok.split("# Time [s]\tx [m]"))

    def test_padding_removed_tabs_kept(self):
        self.assertEqual(self.tok.split(" 1248272272.841 \t 0.50 \t-1.2\r\n"), ("1248272272.841", "0.50", "-1.2"))

    def test_empty_edge_fields_preserved(self):
        self.assertEqual(self.tok.split("\t1\t2\t"), ("", "1", "2", ""))

    def test_blank_line_skipped(self):
        self.assertIsNone(self.tok.split("   \n"))

    def test_records_carry_line_numbers(self):
        handle = io.StringIO("# header\n1\t5\n\n2\t14\n")
        recs = list(self.tok.records(handle, Path("Barcodes.dat")))
        self.assertEqual([r.line_no for r in recs], [2, 4])
        self.assertEqual(recs[1].int_field(1), 14)


class TestRecordFields(unittest.TestCase):
    def test_float_field(self):
        rec = Record(("10.25", "3"))
        self.assertEqual(rec.float_field(0), 10.25)
        self.assertEqual(rec.int_field(1), 3)

    def test_integral_float_accepted_as_int(self):
        self.assertEqual(Record(("5.0",)).int_field(0), 5)

    def test_non_integral_rejected(self):
        with self.assertRaises(MalformedFieldError):
            Record(("5.7",)).int_field(0)

    def test_non_numeric_rejected(self):
        rec = Record(("abc",), Path("x.dat"), 7)
        with self.assertRaises(MalformedFieldError) as ctx:
            rec.float_field(0, "time")
        self.assertEqual(ctx.exception.line_no, 7)
        self.assertEqual(ctx.exception.path, Path("x.dat"))

    def test_non_finite_rejected(self):
        for text in ("nan", "inf", "-Infinity"):
            with self.assertRaises(MalformedFieldError):
                Record((text,)).float_field(0, "time")

    def test_missing_field(self):
        with self.assertRaises(MalformedFieldError):
            Record(("1", "2")).float_field(2, "y")

    def test_malformed_is_value_error(self):
        with self.assertRaises(ValueError):
            Record(("",)).float_field(0)


class TestOpenDataFile(unittest.TestCase):
    def test_missing_file(self):
        with self.assertRaises(FileOpenError) as ctx:
            open_data_file(Path("/nonexistent/Robot1_Odometry.dat"), "odometry")
        self.assertEqual(ctx.exception.path.name, "Robot1_Odometry.dat")
        self.assertIsInstance(ctx.exception, OSError)


if __name__ == "__main__":
    unittest.main()
