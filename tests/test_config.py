import pytest
from pydantic import ValidationError

from asgi_encoding_negotiator.config import CompressionLevel, ConfigError, NegotiationConfig
from asgi_encoding_negotiator.negotiation import Coding


def test_defaults_are_explicit():
    config = NegotiationConfig()

    assert config.preferred_algorithm is Coding.GZIP
    assert config.compression_level == 6

def test_config_is_frozen_and_hashable():
    config = NegotiationConfig()

    with pytest.raises(ValidationError):
        config.compression_level = 1

    assert hash(config) == hash(NegotiationConfig())

@pytest.mark.parametrize("algorithm", [Coding.STAR, "*", "brotli", None])
def test_rejects_bad_algorithm(algorithm):
    with pytest.raises(ValidationError):
        NegotiationConfig(preferred_algorithm=algorithm)

@pytest.mark.parametrize("level", [-1, 10, "fastest", True])
def test_rejects_bad_level(level):
    with pytest.raises(ValidationError):
        NegotiationConfig(compression_level=level)

def test_algorithm_name_is_coerced():
    assert NegotiationConfig(preferred_algorithm="DEFLATE").preferred_algorithm is Coding.DEFLATE

def test_from_mapping_snake_case():
    config = NegotiationConfig.from_mapping(
        {"preferred_algorithm": "deflate", "compression_level": 9}
    )

    assert config == NegotiationConfig(preferred_algorithm=Coding.DEFLATE, compression_level=9)

def test_from_mapping_camel_case_and_named_level():
    config = NegotiationConfig.from_mapping(
        {"preferredAlgorithm": " GZip ", "compressionLevel": "high"}
    )

    assert config.preferred_algorithm is Coding.GZIP
    assert config.compression_level == CompressionLevel.HIGH

def test_from_mapping_numeric_string_level():
    assert NegotiationConfig.from_mapping({"compression_level": "3"}).compression_level == 3

def test_from_mapping_empty_uses_defaults():
    assert NegotiationConfig.from_mapping({}) == NegotiationConfig()

@pytest.mark.parametrize(
    "settings",
    [
        {"preferred_algorithm": "compress"},
        {"preferred_algorithm": "*"},
        {"compression_level": "fastest"},
        {"compression_level": 42},
        {"compression_level": False},
    ],
)
def test_from_mapping_rejects_bad_values(settings):
    with pytest.raises(ConfigError) as excinfo:
        NegotiationConfig.from_mapping(settings)
    assert isinstance(excinfo.value.__cause__, ValidationError)
