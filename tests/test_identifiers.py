"""
Tests for ObjectIdentifier, Variable and Diagnostic value types.
"""

import pytest

from oidreg.core.diagnostics import CompileResult, Diagnostic, DiagnosticLog
from oidreg.core.errors import FormatError, InvalidArgumentError
from oidreg.core.identifiers import ObjectIdentifier
from oidreg.core.variable import Variable


class TestObjectIdentifier:

    def test_parse(self):
        oid = ObjectIdentifier.parse("1.3.6.1")
        assert oid.to_numerical() == (1, 3, 6, 1)
        assert str(oid) == "1.3.6.1"

    def test_parse_leading_dot(self):
        assert ObjectIdentifier.parse(".1.3") == ObjectIdentifier((1, 3))

    @pytest.mark.parametrize("dotted", ["1..3", "1.a", "1.-3", "1.3.", "１.３"])
    def test_parse_rejects_malformed(self, dotted):
        with pytest.raises(FormatError):
            ObjectIdentifier.parse(dotted)

    def test_parse_empty(self):
        with pytest.raises(InvalidArgumentError):
            ObjectIdentifier.parse("")

    def test_never_empty(self):
        with pytest.raises(InvalidArgumentError):
            ObjectIdentifier(())

    @pytest.mark.parametrize("arcs", [(1, -1), (1, "3"), (1, 2.0), (True,)])
    def test_rejects_bad_arcs(self, arcs):
        with pytest.raises(InvalidArgumentError):
            ObjectIdentifier(arcs)

    def test_list_input_normalized(self):
        oid = ObjectIdentifier([1, 3, 6])
        assert oid.arcs == (1, 3, 6)
        assert hash(oid) == hash(ObjectIdentifier((1, 3, 6)))

    def test_append_returns_new(self):
        base = ObjectIdentifier((1, 3))
        child = base.append(6)

        assert child == ObjectIdentifier((1, 3, 6))
        assert base == ObjectIdentifier((1, 3))

    def test_immutable(self):
        oid = ObjectIdentifier((1, 3))
        with pytest.raises(AttributeError):
            oid.arcs = (2,)

    def test_ordering(self):
        assert ObjectIdentifier((1, 3)) < ObjectIdentifier((1, 3, 0))
        assert ObjectIdentifier((1, 2, 9)) < ObjectIdentifier((1, 3))

    def test_parent_and_prefix(self):
        oid = ObjectIdentifier((1, 3, 6))
        assert oid.parent == ObjectIdentifier((1, 3))
        assert oid.starts_with(ObjectIdentifier((1, 3)))
        assert not oid.starts_with(ObjectIdentifier((1, 4)))
        with pytest.raises(ValueError):
            ObjectIdentifier((1,)).parent

    def test_coerce(self):
        oid = ObjectIdentifier((1, 3))
        assert ObjectIdentifier.coerce(oid) is oid
        assert ObjectIdentifier.coerce("1.3") == oid
        assert ObjectIdentifier.coerce([1, 3]) == oid


class TestVariable:

    def test_coerces_id(self):
        variable = Variable((1, 3, 6), 7)
        assert variable.id == ObjectIdentifier((1, 3, 6))
        assert str(variable) == "1.3.6 = 7"

    def test_without_data(self):
        assert str(Variable(ObjectIdentifier((1,)))) == "1"


class TestDiagnostics:

    def test_str(self):
        assert str(Diagnostic.error("boom", "a.yaml", 3)) == "a.yaml:3: error: boom"
        assert str(Diagnostic.warning("hmm")) == "warning: hmm"

    def test_log_is_append_only_until_reset(self):
        log = DiagnosticLog()
        log.errors.append(Diagnostic.error("e"))
        log.warnings.append(Diagnostic.warning("w"))

        assert len(log) == 2
        assert [d.message for d in log.all()] == ["e", "w"]

        log.reset()
        assert not log

    def test_compile_result(self):
        result = CompileResult()
        assert result.succeeded
        result.errors.append(Diagnostic.error("e"))
        assert not result.succeeded
