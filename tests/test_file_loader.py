import codecs
import io
import pandas as pd
import pytest
from basalt_visc.core.exceptions import DecodeError
from basalt_visc.io.file_loader import decode_rows, decode_text, import_samples, is_spreadsheet

CSV_TEXT = (
    "SiO2_wt%, Al2O3 ,Temp(C),Log10_Viscosity,Remark\n"
    "\n"
    "53.5,15.33,1488,2.268,Hawaii\n"
    "   \n"
    "53.5,15.33,1470,2.232,Hawaii,extra\n"
    "48.2,13.1,1480\n"
)

def test_decode_text_contract():
    rows = decode_text(io.StringIO(CSV_TEXT))
    assert len(rows) == 3
    assert list(rows[0]) == ["SiO2_wt%", "Al2O3", "Temp(C)", "Log10_Viscosity", "Remark"]
    assert rows[1]["Remark"] == "Hawaii"          # extra value dropped
    assert rows[2]["Log10_Viscosity"] is None     # ragged line
    assert rows[2]["Remark"] is None

def test_decode_text_bytes_with_bom():
    buf = io.BytesIO(codecs.BOM_UTF8 + b"SiO2,temp,viscosity\n50,1400,2\n")
    rows = decode_text(buf)
    assert rows == [{"SiO2": "50", "temp": "1400", "viscosity": "2"}]

def test_decode_text_empty_middle_cell_kept():
    rows = decode_text(io.StringIO("SiO2,Al2O3,temp\n50,,1400\n"))
    assert rows == [{"SiO2": "50", "Al2O3": "", "temp": "1400"}]

def test_decode_text_duplicate_header_last_value_wins():
    rows = decode_text(io.StringIO("SiO2,temp,SiO2\n40,1400,50\n"))
    assert rows == [{"SiO2": "50", "temp": "1400"}]
    assert list(rows[0]) == ["SiO2", "temp"]
    ds = import_samples(io.StringIO("SiO2,temp,SiO2\n40,1400,50\n"), name="dup.csv")
    assert ds.samples[0].SiO2 == 50.0

def test_decode_text_header_only_or_empty():
    assert decode_text(io.StringIO("SiO2,temp\n")) == []
    assert decode_text(io.StringIO("\n  \n")) == []

def test_import_csv_file(tmp_path):
    p = tmp_path / "melts.csv"
    p.write_text(CSV_TEXT, encoding="utf-8")
    ds = import_samples(p)
    # ragged third row has temperature and SiO2, so it is kept
    assert ds.count == 3
    assert ds.provenance == "Imported File"
    assert ds.detail == "Found 3 rows"
    assert [s.label for s in ds.samples] == ["Hawaii", "Hawaii", ""]
    assert not ds.is_empty

def test_import_without_valid_rows_is_empty_not_error():
    ds = import_samples(io.StringIO("foo\nbar\n"), name="junk.csv")
    assert ds.is_empty
    assert ds.count == 0
    assert ds.detail == "Found 0 rows"

def test_import_spreadsheet_in_memory():
    df = pd.DataFrame({
        "SiO2": [53.5, 53.5, None],
        "Temperature (C)": [1488, 1470, 1450],
        "viscosity": [2.268, 2.232, None],
        "Sample name": ["Hawaii", None, "blank"],
    })
    buf = io.BytesIO()
    df.to_excel(buf, index=False)
    buf.seek(0)
    ds = import_samples(buf, name="melts.xlsx")
    assert ds.count == 2
    assert [s.temperature for s in ds.samples] == [1488.0, 1470.0]
    assert [s.label for s in ds.samples] == ["Hawaii", ""]

def test_spreadsheet_empty_cells_omitted():
    df = pd.DataFrame({"SiO2": [50.0], "note": [None]})
    buf = io.BytesIO()
    df.to_excel(buf, index=False)
    buf.seek(0)
    assert decode_rows(buf, name="a.xlsx") == [{"SiO2": 50.0}]

def test_corrupt_spreadsheet_raises_decode_error():
    with pytest.raises(DecodeError):
        import_samples(io.BytesIO(b"not a zip file"), name="broken.xlsx")

def test_undecodable_text_raises_decode_error():
    with pytest.raises(DecodeError):
        decode_rows(io.BytesIO(b"\xff\xfe\xfa bad"), name="bad.csv")

@pytest.mark.parametrize("name,expected", [("a.XLSX", True), ("a.xls", True), ("a.csv", False), ("a.txt", False)])
def test_is_spreadsheet(name, expected):
    assert is_spreadsheet(name) is expected
