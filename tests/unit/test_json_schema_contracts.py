"""
Tests for JSON Schema Contract Validators

Комплексное тестирование JSON Schema валидаторов:
- Валидность самих схем
- Валидация правильных данных
- Детекция нарушений required полей
- Детекция нарушений типов и constraints (min/enum/additionalProperties)
- Интеграция с Pydantic моделью RankData и AlphaSamplerConfig
"""

import json

import pytest
from jsonschema import ValidationError

from src.core.contracts import (
    AlphaSamplerConfigValidator,
    RankDataValidator,
    SchemaLoader,
    validate_alpha_sampler_config,
    validate_rank_data,
)
from src.core.domain import RankData


# =============================================================================
# FIXTURES - VALID DATA SAMPLES
# =============================================================================


@pytest.fixture
def valid_config():
    """Валидная конфигурация alpha sampler'а."""
    return {"alpha_prop_sd": 0.1, "lambda_rate": 0.1, "alpha_max": 1e6}


@pytest.fixture
def valid_rank_data():
    """Валидная выборка: 3 наблюдения по 4 элемента."""
    return {
        "n_items": 4,
        "rankings": [
            [1, 2, 3, 4],
            [4, 3, 2, 1],
            [2, 1, 3, 4],
        ],
        "consensus": [1, 2, 3, 4],
    }


# =============================================================================
# ТЕСТЫ: SchemaLoader
# =============================================================================


class TestSchemaLoader:
    """Загрузка и meta-validation схем."""

    @pytest.mark.parametrize("schema_name", ["alpha_sampler_config", "rank_data"])
    def test_load_schema(self, schema_name):
        loader = SchemaLoader()
        schema = loader.load_schema(schema_name)
        assert schema["type"] == "object"
        assert schema["$schema"] == "https://json-schema.org/draft/2020-12/schema"

    def test_schema_cached(self):
        loader = SchemaLoader()
        assert loader.load_schema("rank_data") is loader.load_schema("rank_data")

    def test_missing_schema(self):
        with pytest.raises(FileNotFoundError):
            SchemaLoader().load_schema("does_not_exist")

    def test_missing_directory(self, tmp_path):
        with pytest.raises(RuntimeError, match="Schema directory not found"):
            SchemaLoader(tmp_path / "nope")

    def test_invalid_schema_rejected(self, tmp_path):
        (tmp_path / "broken.json").write_text(json.dumps({"type": 12}), encoding="utf-8")
        loader = SchemaLoader(tmp_path)
        with pytest.raises(ValueError, match="Invalid JSON Schema in broken.json"):
            loader.load_schema("broken")

    def test_custom_directory(self, tmp_path):
        (tmp_path / "tiny.json").write_text(
            json.dumps({"$schema": "https://json-schema.org/draft/2020-12/schema", "type": "object"}),
            encoding="utf-8",
        )
        loader = SchemaLoader(tmp_path)
        assert loader.schema_dir == tmp_path
        assert loader.load_schema("tiny")["type"] == "object"


# =============================================================================
# ТЕСТЫ: alpha_sampler_config
# =============================================================================


class TestAlphaSamplerConfigContract:
    """alpha_sampler_config.json"""

    def test_valid(self, valid_config):
        validate_alpha_sampler_config(valid_config)

    def test_valid_with_metric(self, valid_config):
        validate_alpha_sampler_config({**valid_config, "metric": "kendall"})

    def test_alpha_max_zero_allowed(self, valid_config):
        validate_alpha_sampler_config({**valid_config, "alpha_max": 0})

    @pytest.mark.parametrize("field", ["alpha_prop_sd", "lambda_rate", "alpha_max"])
    def test_missing_required(self, valid_config, field):
        del valid_config[field]
        with pytest.raises(ValidationError, match=field):
            validate_alpha_sampler_config(valid_config)

    @pytest.mark.parametrize("field", ["alpha_prop_sd", "lambda_rate"])
    def test_non_positive_rejected(self, valid_config, field):
        valid_config[field] = 0
        with pytest.raises(ValidationError):
            validate_alpha_sampler_config(valid_config)

    def test_negative_alpha_max_rejected(self, valid_config):
        valid_config["alpha_max"] = -1
        with pytest.raises(ValidationError):
            validate_alpha_sampler_config(valid_config)

    def test_unknown_metric_rejected(self, valid_config):
        with pytest.raises(ValidationError):
            validate_alpha_sampler_config({**valid_config, "metric": "euclid"})

    def test_wrong_type_rejected(self, valid_config):
        valid_config["lambda_rate"] = "0.1"
        with pytest.raises(ValidationError):
            validate_alpha_sampler_config(valid_config)

    def test_additional_properties_rejected(self, valid_config):
        with pytest.raises(ValidationError):
            validate_alpha_sampler_config({**valid_config, "seed": 42})

    def test_is_valid(self, valid_config):
        validator = AlphaSamplerConfigValidator()
        assert validator.is_valid(valid_config)
        assert not validator.is_valid({})


# =============================================================================
# ТЕСТЫ: rank_data
# =============================================================================


class TestRankDataContract:
    """rank_data.json"""

    def test_valid(self, valid_rank_data):
        validate_rank_data(valid_rank_data)

    def test_consensus_optional(self, valid_rank_data):
        del valid_rank_data["consensus"]
        validate_rank_data(valid_rank_data)

    def test_empty_rankings_rejected(self, valid_rank_data):
        valid_rank_data["rankings"] = []
        with pytest.raises(ValidationError):
            validate_rank_data(valid_rank_data)

    def test_non_positive_rank_rejected(self, valid_rank_data):
        valid_rank_data["rankings"][0][0] = 0
        with pytest.raises(ValidationError):
            validate_rank_data(valid_rank_data)

    def test_n_items_integer(self, valid_rank_data):
        valid_rank_data["n_items"] = 4.5
        with pytest.raises(ValidationError):
            validate_rank_data(valid_rank_data)

    def test_iter_errors_reports_all(self):
        errors = list(RankDataValidator().iter_errors({"n_items": 0, "extra": True}))
        # n_items < 1, rankings отсутствует, extra запрещён
        assert len(errors) == 3


# =============================================================================
# ТЕСТЫ: Интеграция с моделями
# =============================================================================


class TestModelIntegration:
    """Payload → schema → Pydantic / dataclass."""

    def test_rank_data_from_payload(self, valid_rank_data):
        data = RankData.from_payload(valid_rank_data)
        assert data.n_obs == 3
        assert data.matrix().shape == (4, 3)

    def test_rank_data_from_invalid_payload(self, valid_rank_data):
        valid_rank_data["n_items"] = 0
        with pytest.raises(ValidationError):
            RankData.from_payload(valid_rank_data)
