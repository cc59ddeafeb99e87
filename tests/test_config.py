"""
Configuration Tests
===================
"""

import pytest

from ism_engine.config import AnalysisConfig, EngineConfig
from ism_engine.contracts.base import ErrorCode, InvalidInputError


class TestEngineConfig:

    def test_defaults(self):
        config = EngineConfig()

        assert config.analysis.strict_identifiers is True
        assert config.analysis.level_cap_margin == 5
        assert config.analysis.micmac_split is None
        assert config.observability.enable_audit is True

    def test_from_env_overrides(self):
        config = EngineConfig.from_env({
            "ISM_STRICT_IDENTIFIERS": "false",
            "ISM_LEVEL_CAP_MARGIN": "2",
            "ISM_MICMAC_SPLIT": "3.5",
            "ISM_AUDIT_ENABLED": "0",
        })

        assert config.analysis.strict_identifiers is False
        assert config.analysis.level_cap_margin == 2
        assert config.analysis.micmac_split == 3.5
        assert config.observability.enable_audit is False

    def test_from_env_empty_keeps_defaults(self):
        assert EngineConfig.from_env({}).analysis == AnalysisConfig()

    @pytest.mark.parametrize("env", [
        {"ISM_STRICT_IDENTIFIERS": "maybe"},
        {"ISM_LEVEL_CAP_MARGIN": "many"},
        {"ISM_MICMAC_SPLIT": "half"},
        {"ISM_LEVEL_CAP_MARGIN": "-1"},
    ])
    def test_from_env_rejects_bad_values(self, env):
        with pytest.raises(InvalidInputError):
            EngineConfig.from_env(env)

    def test_negative_margin_rejected(self):
        with pytest.raises(InvalidInputError) as exc:
            AnalysisConfig(level_cap_margin=-1)
        assert exc.value.code == ErrorCode.INVALID_INPUT

    def test_analysis_config_frozen(self):
        config = AnalysisConfig()
        with pytest.raises(AttributeError):
            config.strict_identifiers = False
