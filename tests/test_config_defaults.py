from typefill.config import load_config


def test_default_values() -> None:
    cfg = load_config(env={})
    assert cfg.schema_version == 1
    assert cfg.seed is None
    assert cfg.nil_probability == 0.2
    assert cfg.element_count.min == 1
    assert cfg.element_count.max == 10
    assert cfg.max_depth == 100
