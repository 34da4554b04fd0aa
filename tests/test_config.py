import pytest

from dayplanner.config import load_config


def test_config_defaults_without_file():
    cfg = load_config(None)

    assert cfg.routines.occurrence_cap == 120
    assert cfg.routines.default_duration_minutes == 30
    assert cfg.conflicts.policy == "pairs"
    assert cfg.conflicts.sample_size == 4
    assert (cfg.day.start, cfg.day.end) == ("00:00", "24:00")
    assert cfg.logging.level == "INFO"


def test_config_reads_custom_values(tmp_path):
    cfg_path = tmp_path / "config.yaml"
    cfg_path.write_text(
        """
        routines:
          occurrence_cap: 52
        conflicts:
          policy: ids
        day:
          start: "07:00"
          end: "22:00"
        logging:
          level: debug
        """,
        encoding="utf-8",
    )

    cfg = load_config(str(cfg_path))

    assert cfg.routines.occurrence_cap == 52
    assert cfg.routines.default_duration_minutes == 30
    assert cfg.conflicts.policy == "ids"
    assert (cfg.day.start, cfg.day.end) == ("07:00", "22:00")
    assert cfg.logging.level == "DEBUG"


def test_empty_config_file_uses_defaults(tmp_path):
    cfg_path = tmp_path / "config.yaml"
    cfg_path.write_text("", encoding="utf-8")

    assert load_config(str(cfg_path)).conflicts.policy == "pairs"


def test_unknown_conflict_policy_is_rejected(tmp_path):
    cfg_path = tmp_path / "config.yaml"
    cfg_path.write_text("conflicts:\n  policy: never\n", encoding="utf-8")

    with pytest.raises(ValueError):
        load_config(str(cfg_path))
