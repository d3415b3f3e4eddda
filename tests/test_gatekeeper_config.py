import dataclasses

from memex.gatekeeper_config import GatekeeperConfig


def test_defaults_match_documented_values():
    cfg = GatekeeperConfig()
    assert cfg.max_inject == 3
    assert cfg.min_level_inject == 2
    assert cfg.min_level_fallback == 1
    assert cfg.min_trust_show == 0.40
    assert cfg.block_if_consecutive_fail_ge == 3
    assert cfg.skip_if_top1_score_ge == 0.85
    assert cfg.exclude_stale_by_default is True
    assert cfg.active_statuses == {"active", "verified"}
    assert cfg.digest_head_chars == 80
    assert cfg.digest_tail_chars == 80


def test_default_status_sets_are_independent():
    a = GatekeeperConfig()
    b = GatekeeperConfig()
    a.active_statuses.add("draft")
    assert "draft" not in b.active_statuses


def test_replace_keeps_other_fields():
    base = GatekeeperConfig()
    changed = dataclasses.replace(base, max_inject=7)
    assert changed.max_inject == 7
    assert changed.min_trust_show == base.min_trust_show
    assert base.max_inject == 3