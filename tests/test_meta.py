"""
Tests for rule sets: registration, arity dispatch and field universes.
"""

import functools

import pytest

from protector.dsl import Meta, Rule, rule_arity, can
from protector.types.errors import InvalidRuleError


class TestRuleArity:
    """Test how many values a rule receives"""

    def test_sniffs_arity(self):
        assert rule_arity(lambda: None) == 0
        assert rule_arity(lambda user: None) == 1
        assert rule_arity(lambda user, entry: None) == 2

    def test_var_positional_gets_everything(self):
        assert rule_arity(lambda *args: None) == 2

    def test_optional_parameters_are_filled(self):
        assert rule_arity(lambda user=None, entry=None, extra=None: None) == 2

    def test_too_many_required_parameters(self):
        with pytest.raises(InvalidRuleError):
            rule_arity(lambda a, b, c: None)

    def test_required_keyword_only(self):
        def rule(user, *, flag):
            pass

        with pytest.raises(InvalidRuleError):
            rule_arity(rule)

    def test_bound_methods_and_partials(self):
        class Policy:
            def rule(self, user):
                pass

        assert rule_arity(Policy().rule) == 1
        assert rule_arity(functools.partial(lambda a, b, c: None, 1)) == 2

    def test_explicit_arity(self):
        assert Rule.wrap(lambda *args: None, arity=1).arity == 1
        with pytest.raises(InvalidRuleError):
            Rule.wrap(lambda: None, arity=3)

    def test_rule_must_be_callable(self):
        with pytest.raises(InvalidRuleError):
            Rule.wrap('not a rule')

    def test_rules_receive_prefix(self):
        calls = []
        meta = Meta()
        meta << (lambda: calls.append(()))
        meta << (lambda user: calls.append((user,)))
        meta << (lambda user, entry: calls.append((user, entry)))
        meta << (lambda *args: calls.append(args))

        meta.evaluate('user', 'entry')
        assert calls == [(), ('user',), ('user', 'entry'), ('user', 'entry')]


class TestMeta:
    """Test rule set behaviour"""

    def test_add_rule_as_decorator(self):
        meta = Meta(lambda: ['a'])

        @meta.add_rule
        def first():
            can('read')

        @meta.add_rule(arity=0)
        def second(*args):
            assert args == ()

        assert callable(first)
        assert [rule.func for rule in meta.rules] == [first, second]
        assert meta.evaluate('user', 'entry').can('read', 'a') is True

    def test_fields_are_memoized(self):
        calls = []

        def provider():
            calls.append(1)
            return iter(['a', 'b'])

        meta = Meta(provider)
        assert meta.fields == ('a', 'b')
        assert meta.fields == ('a', 'b')
        assert calls == [1]

    def test_fields_resolved_lazily(self):
        calls = []
        meta = Meta(lambda: calls.append(1) or ['a'])
        meta << (lambda: can('read', 'a'))

        meta.evaluate('user', 'entry')
        assert calls == []

        meta << (lambda: can('update'))
        meta.evaluate('user', 'entry')
        assert calls == [1]

    def test_provider_failure_propagates(self):
        def provider():
            raise LookupError("schema unavailable")

        meta = Meta(provider)
        meta << (lambda: can('read'))

        with pytest.raises(LookupError):
            meta.evaluate('user', 'entry')
        with pytest.raises(LookupError):
            meta.fields

    def test_default_universe_is_empty(self):
        meta = Meta()
        meta << (lambda: can('read'))
        assert meta.fields == ()
        assert meta.evaluate('user', 'entry').can('read') is False

    def test_inherit_copies_rules(self):
        parent = Meta(lambda: ['a', 'b'], model='parent')
        parent << (lambda: can('read', 'a'))

        child = parent.inherit(fields_provider=lambda: ['a', 'b', 'c'])
        child << (lambda: can('update'))

        assert len(parent.rules) == 1
        assert len(child.rules) == 2
        assert child.model == 'parent'
        assert child.model_name == 'parent'
        assert child.fields == ('a', 'b', 'c')

        box = child.evaluate('user', 'entry')
        assert box.can('read', 'a') is True
        assert box.can('update', 'c') is True
        assert parent.evaluate('user', 'entry').can('update') is False

    def test_model_name(self):
        class Post:
            pass

        assert Meta(model=Post).model_name == 'Post'
        assert Meta().model_name == 'anonymous'
        assert 'Post' in repr(Meta(model=Post))

    def test_model_is_second_argument(self):
        meta = Meta(lambda: ['a'], 'Post')
        assert meta.model == 'Post'
        assert meta.inherit().model == 'Post'
        assert not hasattr(meta, 'adapter')
