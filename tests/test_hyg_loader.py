import logging

import pytest

from catalogs import load_catalog
from core.errors import CatalogError

HYG_HEADER = "id;hip;proper;ra;dec;mag;ci;con;dist;spect"
HYG_ROWS = [
    "0;;Sol;0.000000;0.000000;-26.700;0.656;;0.0000;G2V",
    "32263;32349;Sirius;6.752481;-16.716116;-1.440;0.009;CMa;2.6371;A0m...",
    "91262;91262;Vega;18.615649;38.783692;0.030;-0.001;Lyr;7.6787;A0Vvar",
    "11734;11767;Polaris;2.529750;89.264109;1.970;0.636;UMi;132.6260;F7:Ib-IIv SB",
    "1;1;;0.000060;1.089009;9.100;0.482;Psc;219.7802;F5",
    "2;2;;;-19.498840;9.270;0.999;Cet;47.9616;K3V",
    "3;3;;abc;38.859279;6.610;-0.019;And;442.4779;B9",
    "4;4;;0.003;10.0;6.000;;Peg;;",
    "5;5;;0.004;11.0;5.990;;;;",
]


@pytest.fixture
def hyg_csv(tmp_path):
    path = tmp_path / "hygdata_v40.csv"
    path.write_text("\n".join([HYG_HEADER] + HYG_ROWS) + "\n", encoding="utf-8")
    return path


def test_load_catalog(hyg_csv, caplog):
    with caplog.at_level(logging.INFO, logger="catalogs.hyg_loader"):
        stars = load_catalog(hyg_csv)

    assert [s.id for s in stars] == ["0", "32263", "91262", "11734", "5"]
    sirius = stars[1]
    assert sirius.name == "Sirius"
    assert sirius.ra == pytest.approx(6.752481)
    assert sirius.dec == pytest.approx(-16.716116)
    assert sirius.mag == pytest.approx(-1.44)
    assert sirius.color_index == pytest.approx(0.009)
    assert sirius.constellation == "CMa"
    assert sirius.distance == pytest.approx(2.6371)
    assert sirius.spectral_type == "A0m..."

    faint = stars[-1]
    assert faint.name is None and faint.constellation is None
    assert faint.color_index == 0.0
    assert faint.distance is None

    assert "Loaded 5 stars" in caplog.text
    assert "2 invalid rows skipped" in caplog.text


def test_magnitude_limit(hyg_csv):
    assert [s.name for s in load_catalog(hyg_csv, magnitude_limit=0.5)] == ["Sol", "Sirius", "Vega"]


def test_alternate_layout(tmp_path):
    path = tmp_path / "stars.csv"
    path.write_text("HIP, RA, Dec, Mag, Name\n"
                    "24436, 5.242298, -8.201640, 0.18, Rigel\n"
                    "27989, 5.919529, 7.407063, 0.45, Betelgeuse\n", encoding="utf-8")
    stars = load_catalog(path, separator=",")
    assert [(s.id, s.name) for s in stars] == [("24436", "Rigel"), ("27989", "Betelgeuse")]
    assert stars[0].color_index == 0.0


def test_missing_ids_fall_back_to_row_number(tmp_path):
    path = tmp_path / "noid.csv"
    path.write_text("ra;dec;mag\n1;2;3\n4;5;6.5\n7;8;1\n", encoding="utf-8")
    assert [s.id for s in load_catalog(path)] == ["1", "3"]


def test_missing_file(tmp_path):
    with pytest.raises(CatalogError, match="not found"):
        load_catalog(tmp_path / "nope.csv")


def test_empty_file(tmp_path):
    path = tmp_path / "empty.csv"
    path.write_text("", encoding="utf-8")
    with pytest.raises(CatalogError, match="empty"):
        load_catalog(path)


def test_header_only(tmp_path):
    path = tmp_path / "header.csv"
    path.write_text(HYG_HEADER + "\n", encoding="utf-8")
    with pytest.raises(CatalogError, match="no data rows"):
        load_catalog(path)


def test_missing_required_column(tmp_path):
    path = tmp_path / "bad.csv"
    path.write_text("id;ra;dec\n1;2;3\n", encoding="utf-8")
    with pytest.raises(CatalogError, match="mag"):
        load_catalog(path)
