"""End-to-end tests for a modelling session.

These tests run the whole loop (load model, bind data, run, apply
scripts, render) and check that failing steps do not disturb results
produced by earlier steps.
"""

import pytest

from modelling.config import RuntimeConfig
from modelling.errors import DataFormatError, ModelExecutionError, ModelLoadError, ScriptError
from modelling.scripting import PandasEvalEngine
from modelling.session import Session


def test_end_to_end_report(write_data):
    path = write_data("LATA 2020 2021 2022\nX 1 2\n")
    session = Session("test.doubler").read_data_from(path).run_model()
    lines = session.results_as_tsv().splitlines()
    assert lines[0] == "LATA\t2020\t2021\t2022"
    assert "Y\t2\t4\t4" in lines
    assert lines == ["LATA\t2020\t2021\t2022", "X\t1\t2\t2", "Y\t2\t4\t4"]


def test_script_adds_rows(write_data):
    path = write_data("LATA 2020 2021\nX 1 3\n")
    session = Session("test.doubler").read_data_from(path).run_model()
    session.run_script("Z = Y - X")
    assert session.results_as_tsv().splitlines()[-1] == "Z\t1\t3"


def test_script_from_file(write_data, tmp_path):
    path = write_data("LATA 2020\nX 4\n")
    script = tmp_path / "half.txt"
    script.write_text("H = X / 2\n", encoding="utf-8")
    session = Session("test.doubler").read_data_from(path).run_model()
    session.run_script_from_file(script)
    assert "H\t2" in session.results_as_tsv().splitlines()


def test_failed_script_keeps_previous_results(write_data):
    path = write_data("LATA 2020 2021\nX 1 2\n")
    session = Session("test.doubler").read_data_from(path).run_model()
    session.run_script("Z = X + 1")
    before = session.results_as_tsv()
    with pytest.raises(ScriptError):
        session.run_script("Z = X * 100\nundefined_name + 1")
    assert session.results_as_tsv() == before


def test_script_before_run_fails(write_data):
    session = Session("test.doubler").read_data_from(write_data("LATA 2020\nX 1\n"))
    with pytest.raises(ModelExecutionError, match="before applying scripts"):
        session.run_script("Z = X")


def test_model_runs_once(write_data):
    session = Session("test.doubler").read_data_from(write_data("LATA 2020\nX 1\n")).run_model()
    first = session.results
    with pytest.raises(ModelExecutionError):
        session.run_model()
    assert session.results is first


def test_failed_run_leaves_no_results(write_data):
    session = Session("test.failing").read_data_from(write_data("LATA 2020\nX 1\n"))
    with pytest.raises(ModelExecutionError):
        session.run_model()
    assert session.results is None
    assert session.results_as_tsv() == "LATA\t2020\n"


def test_bad_data_surfaces_format_error(write_data):
    session = Session("test.doubler")
    with pytest.raises(DataFormatError):
        session.read_data_from(write_data("LATA 2020\nX x\n"))


def test_unknown_model():
    with pytest.raises(ModelLoadError):
        Session("models.nope")


def test_synthesized_years(write_data):
    cfg = RuntimeConfig(year_axis="synthesized", first_year=2015)
    session = Session("test.doubler", cfg).read_data_from(write_data("LATA 1990 1991\nX 1\n")).run_model()
    assert session.years == [2015, 2016]
    assert session.results_as_tsv().splitlines()[0] == "LATA\t2015\t2016"


def test_configured_engine(write_data):
    cfg = RuntimeConfig(script_engine="pandas")
    session = Session("test.doubler", cfg).read_data_from(write_data("LATA 2020\nX 1\n")).run_model()
    assert isinstance(session.engine, PandasEvalEngine)
    session.run_script("Z = X + Y")
    assert "Z\t3" in session.results_as_tsv().splitlines()


def test_sample_model_with_sample_script(repo_root):
    assets = repo_root / "assets"
    session = Session("models.model1").read_data_from(assets / "data" / "data1.txt").run_model()
    session.run_script_from_file(assets / "scripts" / "script1.py")
    lines = session.results_as_tsv().splitlines()
    assert lines[0].split("\t")[1:] == [str(y) for y in range(2015, 2030)]
    names = [line.split("\t")[0] for line in lines[1:]]
    assert names[:11] == ["twKI", "twKS", "twINW", "twEKS", "twIMP", "KI", "KS", "INW", "EKS", "IMP", "PKB"]
    assert names[11:] == ["ZDEKS", "ZDKI", "ZDKS", "ZDINW", "ZDIMP"]
    assert lines[1].split("\t")[1] == "1,03"
    assert lines[6].split("\t")[1] == "1 023 752,2"
