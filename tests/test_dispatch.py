"""Tests for match, match_async, match_exhaustive and the if_/if_not guards."""

import functools
import logging

import pytest
from klaw_enum import MissingHandlerError, Variant
from klaw_enum.dispatch import Arms, collect_arms, invoke

from tests.models import Point, Ready


class TestMatch:
    """Tests for synchronous dispatch."""

    def test_scenario_status(self, status, finished_at):
        ready = status.Ready(Ready(finished_at))
        result = ready.match(Loading=lambda: 'waiting', Ready=lambda p: p.finished_at)
        assert result == finished_at
        assert ready.if_('Ready') is True
        assert ready.to_wire() == {'tag': 'Ready', 'data': Ready(finished_at)}
        assert status.parse(ready.to_wire()) == ready

    def test_handler_receives_payload_and_variant(self, shape):
        dot = shape.Dot(Point(1, 2))
        seen = dot.match(Dot=lambda payload, variant: (payload, variant))
        assert seen == (Point(1, 2), dot)

    def test_fallback_receives_variant(self, shape):
        empty = shape.Empty()
        assert empty.match(Circle=lambda r: r, _=lambda v: v) is empty

    def test_fallback_with_no_parameters(self, shape):
        assert shape.Square(2.0).match(Circle=lambda r: r, _=lambda: 'other') == 'other'

    def test_specific_handler_beats_fallback(self, shape):
        assert shape.Circle(1.0).match(Circle=lambda r: 'circle', _=lambda: 'other') == 'circle'

    def test_mapping_form(self, shape):
        handlers = {'Circle': lambda r: r * 2, '_': lambda: 0.0}
        assert shape.Circle(1.5).match(handlers) == 3.0
        assert shape.Empty().match(handlers) == 0.0

    def test_keywords_override_mapping(self, shape):
        result = shape.Circle(1.0).match({'Circle': lambda: 'mapping'}, Circle=lambda: 'keyword')
        assert result == 'keyword'

    def test_missing_handler_raises(self, shape):
        with pytest.raises(MissingHandlerError) as exc_info:
            shape.Empty().match(Circle=lambda r: r)
        assert exc_info.value.tag == 'Empty'
        assert exc_info.value.missing == ('Empty',)
        assert "no '_' fallback" in str(exc_info.value)

    def test_missing_handler_is_logged(self, shape, caplog):
        caplog.set_level(logging.DEBUG, logger='klaw_enum')
        with pytest.raises(MissingHandlerError):
            shape.Empty().match(Circle=lambda r: r)
        events = [record.msg['event'] for record in caplog.records if isinstance(record.msg, dict)]
        assert 'missing_handler' in events

    def test_extra_handler_keys_are_ignored(self, shape):
        assert shape.Circle(1.0).match(Circle=lambda r: r * 2, Triangle=lambda: 0) == 2.0
        assert shape.Empty().match({'Triangle': lambda: 0, '_': lambda: 'other'}) == 'other'

    def test_extra_keys_do_not_stand_in_for_missing_handler(self, shape):
        with pytest.raises(MissingHandlerError):
            shape.Empty().match(Triangle=lambda: 0)

    def test_dynamic_factory_accepts_any_handler_key(self, dynamic):
        event = dynamic.Clicked({'x': 1})
        assert event.match(Clicked=lambda p: p['x'], Scrolled=lambda: 0) == 1

    def test_non_callable_handler_rejected(self, shape):
        with pytest.raises(TypeError, match='must be callable'):
            shape.Circle(1.0).match(Circle=42)

    def test_handler_exceptions_propagate(self, shape):
        def boom(_radius: float) -> None:
            raise RuntimeError('handler failed')

        with pytest.raises(RuntimeError, match='handler failed'):
            shape.Circle(1.0).match(Circle=boom)

    def test_falsy_return_values_pass_through(self, shape):
        assert shape.Circle(1.0).match(Circle=lambda: None) is None
        assert shape.Circle(1.0).match(Circle=lambda: 0) == 0

    def test_python_match_statement(self, shape):
        match shape.Dot(Point(3, 4)):
            case Variant(tag='Circle'):
                pytest.fail('matched the wrong variant')
            case Variant('Dot', Point(x=x, y=y)):
                assert (x, y) == (3, 4)
            case _:
                pytest.fail('no case matched')


class TestMatchAsync:
    """Tests for match_async."""

    async def test_awaits_coroutine_handler(self, shape):
        async def area(radius: float) -> float:
            return radius * radius

        assert await shape.Circle(3.0).match_async(Circle=area) == 9.0

    async def test_plain_handler_passes_through(self, shape):
        assert await shape.Circle(2.0).match_async(Circle=lambda r: r + 1) == 3.0

    async def test_async_fallback(self, shape):
        async def other(variant):
            return variant.tag

        assert await shape.Empty().match_async(Circle=lambda r: r, _=other) == 'Empty'

    async def test_missing_handler_raises(self, shape):
        with pytest.raises(MissingHandlerError):
            await shape.Empty().match_async(Circle=lambda r: r)

    async def test_extra_handler_keys_are_ignored(self, shape):
        assert await shape.Circle(2.0).match_async(Circle=lambda r: r, Triangle=lambda: 0) == 2.0

    async def test_handler_exceptions_propagate(self, shape):
        async def boom(_radius: float) -> None:
            raise ValueError('async failure')

        with pytest.raises(ValueError, match='async failure'):
            await shape.Circle(1.0).match_async(Circle=boom)


class TestMatchExhaustive:
    """Tests for match_exhaustive."""

    def test_all_handlers_present(self, status):
        assert status.Loading().match_exhaustive(Loading=lambda: 'wait', Ready=lambda p: p) == 'wait'

    def test_missing_declared_variant(self, shape):
        with pytest.raises(MissingHandlerError) as exc_info:
            shape.Circle(1.0).match_exhaustive(Circle=lambda r: r, Square=lambda s: s)
        assert exc_info.value.missing == ('Dot', 'Empty')
        assert 'Non-exhaustive match' in str(exc_info.value)

    def test_missing_variant_even_if_inactive(self, status):
        with pytest.raises(MissingHandlerError):
            status.Loading().match_exhaustive(Loading=lambda: 'wait')

    def test_fallback_rejected(self, status):
        with pytest.raises(TypeError, match='fallback'):
            status.Loading().match_exhaustive(Loading=lambda: 1, Ready=lambda: 2, _=lambda: 3)

    def test_extra_handler_keys_are_ignored(self, status):
        handlers = {'Loading': lambda: 'wait', 'Ready': lambda p: p, 'Failed': lambda: 'gone'}
        assert status.Loading().match_exhaustive(handlers) == 'wait'

    def test_dynamic_factory_requires_active_tag(self, dynamic):
        assert dynamic.Moved(5).match_exhaustive(Moved=lambda d: d * 2) == 10
        with pytest.raises(MissingHandlerError):
            dynamic.Moved(5).match_exhaustive(Clicked=lambda: 0)


class TestGuards:
    """Tests for if_ and if_not."""

    def test_if_without_handlers(self, status):
        assert status.Loading().if_('Loading') is True
        assert status.Loading().if_('Ready') is False

    def test_if_not_without_handlers(self, status):
        assert status.Loading().if_not('Ready') is True
        assert status.Loading().if_not('Loading') is False

    def test_success_returning_none_becomes_true(self, shape):
        calls = []
        assert shape.Circle(2.0).if_('Circle', calls.append) is True
        assert calls == [2.0]

    def test_failure_returning_none_becomes_false(self, shape):
        calls = []
        assert shape.Circle(2.0).if_('Square', failure=calls.append) is False
        assert calls == [shape.Circle(2.0)]

    def test_handler_values_pass_through(self, shape):
        circle = shape.Circle(2.0)
        assert circle.if_('Circle', lambda r: r * 10) == 20.0
        assert circle.if_('Square', lambda s: s, lambda v: v.tag) == 'Circle'

    def test_if_not_handler_arguments(self, shape):
        circle = shape.Circle(2.0)
        assert circle.if_not('Square', lambda v: v.tag) == 'Circle'
        assert circle.if_not('Circle', lambda v: v, lambda r, v: (r, v.tag)) == (2.0, 'Circle')

    def test_undeclared_tag_is_a_mismatch(self, shape):
        circle = shape.Circle(1.0)
        assert circle.if_('Triangle') is False
        assert circle.if_not('Triangle') is True
        assert circle.if_('Triangle', failure=lambda v: v.tag) == 'Circle'

    def test_guard_rejects_fallback_key(self, shape):
        with pytest.raises(TypeError):
            shape.Circle(1.0).if_('_')

    def test_dynamic_guard_accepts_any_tag(self, dynamic):
        assert dynamic.Clicked().if_('Scrolled') is False


class TestArms:
    """Tests for handler map normalization."""

    def test_fallback_has_its_own_slot(self):
        fallback = lambda: 0  # noqa: E731
        arms = collect_arms({'A': len, '_': fallback}, {})
        assert '_' not in arms.handlers
        assert arms.fallback is fallback

    def test_select(self):
        arms = Arms({'A': len}, fallback=repr)
        assert arms.select('A') == (len, False)
        assert arms.select('B') == (repr, True)
        assert Arms({'A': len}).select('B') is None


class TestInvoke:
    """Tests for arity-trimmed handler calls."""

    def test_trims_to_declared_parameters(self):
        assert invoke(lambda: 'none', 1, 2) == 'none'
        assert invoke(lambda a: a, 1, 2) == 1
        assert invoke(lambda a, b: (a, b), 1, 2) == (1, 2)

    def test_varargs_receive_everything(self):
        assert invoke(lambda *args: args, 1, 2) == (1, 2)

    def test_bound_methods(self):
        class Collector:
            def take(self, payload):
                return payload

        assert invoke(Collector().take, 'p', 'v') == 'p'

    def test_partials_and_builtins(self):
        assert invoke(functools.partial(lambda a, b: a + b, 10), 5, 'variant') == 15
        assert invoke(str.upper, 'abc', 'variant') == 'ABC'

    def test_defaulted_parameters_keep_defaults(self, shape):
        def area(radius, scale=1.0):
            return radius * radius * scale

        assert invoke(area, 2.0, 'variant') == 4.0
        assert invoke(functools.partial(area, scale=2.0), 2.0, 'variant') == 8.0
        assert shape.Circle(2.0).match(Circle=area) == 4.0
