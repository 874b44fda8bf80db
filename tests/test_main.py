import importlib.util
import logging
from pathlib import Path

from planet_manager.main import LOG_LEVEL_ENV, setup_logging


def test_setup_logging_explicit_level():
    assert setup_logging("debug") == logging.DEBUG


def test_setup_logging_from_env(monkeypatch):
    monkeypatch.setenv(LOG_LEVEL_ENV, "WARNING")
    assert setup_logging() == logging.WARNING


def test_setup_logging_unknown_level_falls_back_to_info(monkeypatch):
    monkeypatch.delenv(LOG_LEVEL_ENV, raising=False)
    assert setup_logging("gesprächig") == logging.INFO


def _load_uml_module():
    path = Path(__file__).resolve().parents[1] / "uml" / "generate_uml.py"
    spec = importlib.util.spec_from_file_location("generate_uml", path)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_uml_generator_writes_architecture(tmp_path):
    uml = _load_uml_module()
    out = uml.main(tmp_path)
    text = out.read_text(encoding="utf-8")
    assert out.name == uml.PUML_FILENAME
    assert text.startswith("@startuml")
    for cls in ("PlanetApp", "PlanetService", "PlanetRepository", "Planet", "DatabaseProtocol"):
        assert f"class {cls}" in text or f"interface {cls}" in text
