"""
Test suite for signature base construction
"""

from httpsig_jwk.signing import (
    SignatureParameters,
    build_signature_base,
    build_signature_base_for,
    build_signature_metadata,
    format_component_line,
)

from conftest import SCENARIO_COMPONENTS

SCENARIO_PARAMS = SignatureParameters(created=1728051074, keyid="K1", tag="demo")

SCENARIO_BASE = (
    '"@method": GET\n'
    '"@target-uri": https://example.com/x\n'
    '"@signature-params": ("@method" "@target-uri");created=1728051074;keyid="K1";tag="demo"'
)


class TestBuildSignatureBase:
    """Test the exact shape of the signature base"""

    def test_concrete_scenario(self):
        metadata = build_signature_metadata(SCENARIO_COMPONENTS, SCENARIO_PARAMS)
        base = build_signature_base(SCENARIO_COMPONENTS, metadata)

        assert base == SCENARIO_BASE
        assert not base.endswith("\n")

    def test_build_signature_base_for(self):
        base, metadata = build_signature_base_for(SCENARIO_COMPONENTS, SCENARIO_PARAMS)

        assert base == SCENARIO_BASE
        assert metadata == '("@method" "@target-uri");created=1728051074;keyid="K1";tag="demo"'

    def test_no_components(self):
        base, metadata = build_signature_base_for([])
        assert metadata == '()'
        assert base == '"@signature-params": ()'

    def test_lines_are_used_verbatim(self):
        """Malformed lines are opaque text, not rejected"""
        lines = ['not a component', '"x-custom":no-space', '"@method": GET ']
        base = build_signature_base(lines, "(...)")

        assert base.split("\n") == lines + ['"@signature-params": (...)']

    def test_metadata_line_is_last(self):
        base, _ = build_signature_base_for(SCENARIO_COMPONENTS, SignatureParameters(created=1))
        assert base.split("\n")[-1] == '"@signature-params": ("@method" "@target-uri");created=1'


class TestFormatComponentLine:
    """Test component line formatting helper"""

    def test_plain_component(self):
        assert format_component_line("@method", "GET") == '"@method": GET'

    def test_component_parameters(self):
        line = format_component_line("@query-param", "7", {"name": "id"})
        assert line == '"@query-param";name="id": 7'

    def test_boolean_component_parameter(self):
        line = format_component_line("content-type", "application/json", {"req": True})
        assert line == '"content-type";req: application/json'
