import math
import os
import suite
from streamex import (
    LongStream, DoubleStream, ObjStream, StreamConsumedError, StreamSettings, configure,
    of, of_collection, from_range, compare_double, compare_long, natural_order, reverse_order
)

test = suite.test
assert_that = suite.assert_that
assert_raises = suite.assert_raises


# close handling

@test("close runs handlers once, in registration order")
def test_close_handlers():
    calls = []
    stream = of(1, 2).on_close(lambda: calls.append('a')).on_close(lambda: calls.append('b'))
    stream.close()
    stream.close()
    assert_that(calls == ['a', 'b'], f"handlers should run once in order: {calls}")


@test("closing the wrapper closes the wrapped stream")
def test_close_propagates():
    calls = []
    base = LongStream.of(1).on_close(lambda: calls.append('base'))
    with of_collection([1]).append(base) as stream:
        assert_that(stream.to_list() == [1, 1], "concatenated values")
    assert_that(calls == ['base'], f"closing the result should close its inputs: {calls}")


@test("a closed stream cannot be used")
def test_closed_stream():
    stream = of(1, 2)
    stream.close()
    with assert_raises(StreamConsumedError):
        stream.count()


@test("the first close handler failure is raised, later ones still run")
def test_close_handler_failures():
    calls = []

    def failing(name, error):
        def handler():
            calls.append(name)
            raise error
        return handler

    stream = (of(1)
              .on_close(failing('first', ValueError('first')))
              .on_close(failing('second', KeyError('second')))
              .on_close(lambda: calls.append('third')))
    with assert_raises(ValueError) as raised:
        stream.close()
    assert_that(str(raised.exception) == 'first', f"first failure should surface: {raised.exception}")
    assert_that(calls == ['first', 'second', 'third'], f"every handler should run: {calls}")


@test("intermediate operations share the pipeline's close handlers")
def test_close_from_derived_stage():
    calls = []
    derived = of(1, 2).on_close(lambda: calls.append('closed')).map(lambda x: x * 2).sorted()
    derived.close()
    assert_that(calls == ['closed'], "closing a derived stage closes the pipeline")


# parallel mode

@test("parallel flag is tracked and propagated through concatenation")
def test_parallel_flag():
    assert_that(of(1).parallel().is_parallel(), "parallel()")
    assert_that(not of(1).parallel().sequential().is_parallel(), "sequential() resets the flag")
    assert_that(of(1).append(of(2).parallel()).is_parallel(), "concat of a parallel input is parallel")


@test("parallel reductions agree with sequential ones")
def test_parallel_reductions():
    previous = configure().max_workers
    try:
        configure(max_workers=4)
        data = list(range(-50, 151))
        assert_that(of_collection(data).parallel().sum() == sum(data), "parallel sum")
        assert_that(of_collection(data).parallel().count() == len(data), "parallel count")
        assert_that(of_collection(data).parallel().average() == sum(data) / len(data), "parallel average")
        collected = of_collection(data).parallel().collect(list, list.append, list.extend)
        assert_that(collected == data, "parallel collect keeps segment order")
        assert_that(of_collection(data).parallel().reduce(lambda a, b: a + b, 0) == sum(data), "parallel reduce")
    finally:
        configure(max_workers=previous)


@test("parallel double sum matches the sequential sum for cancelling magnitudes")
def test_parallel_double_sum():
    previous = configure().max_workers
    try:
        configure(max_workers=3)
        values = (1e16, 1.0, -1e16)
        sequential = DoubleStream.of(*values).sum()
        parallel = DoubleStream.of(*values).parallel().sum()
        assert_that(sequential == 1.0, f"sequential sum should be exact: {sequential}")
        assert_that(parallel == sequential, f"sequential {sequential} vs parallel {parallel}")
    finally:
        configure(max_workers=previous)


@test("limit and skip reject negative sizes")
def test_limit_skip_negative():
    with assert_raises(ValueError):
        of(1).limit(-1)
    with assert_raises(ValueError):
        of(1).skip(-1)


# settings

@test("configure validates keys and values")
def test_configure_validation():
    with assert_raises(TypeError):
        configure(unknown_setting=1)
    with assert_raises(ValueError):
        configure(max_workers=0)
    with assert_raises(ValueError):
        StreamSettings(random_batch_size=-5)


@test("invalid environment overrides fall back to the defaults")
def test_env_override_fallback():
    previous = os.environ.get('STREAMEX_MAX_WORKERS')
    try:
        for raw in ('0', '-3', 'abc'):
            os.environ['STREAMEX_MAX_WORKERS'] = raw
            workers = StreamSettings().max_workers
            assert_that(workers == (os.cpu_count() or 1), f"{raw!r} should fall back to the default, got {workers}")
        os.environ['STREAMEX_MAX_WORKERS'] = '2'
        assert_that(StreamSettings().max_workers == 2, "a positive override is used")
    finally:
        if previous is None:
            os.environ.pop('STREAMEX_MAX_WORKERS', None)
        else:
            os.environ['STREAMEX_MAX_WORKERS'] = previous


@test("configure with no arguments returns the live settings")
def test_configure_returns_settings():
    current = configure()
    assert_that(isinstance(current, StreamSettings), "should return the settings object")
    assert_that(current.max_workers >= 1, "max_workers should be positive")


# comparators

@test("compare_double follows total ordering")
def test_compare_double():
    assert_that(compare_double(1.0, 2.0) == -1 and compare_double(2.0, 1.0) == 1, "plain ordering")
    assert_that(compare_double(math.nan, math.inf) == 1, "nan above infinity")
    assert_that(compare_double(math.nan, math.nan) == 0, "nan equals nan")
    assert_that(compare_double(-0.0, 0.0) == -1, "negative zero first")
    assert_that(compare_double(0.0, 0.0) == 0, "equal zeros")


@test("reverse_order inverts a comparator")
def test_reverse_order():
    assert_that(reverse_order(compare_long)(1, 2) == 1, "reversed comparator")
    assert_that(reverse_order()(1, 2) == 1, "reversed natural order")


@test("natural_order compares mutually comparable values")
def test_natural_order():
    order = natural_order()
    assert_that(order(1, 2) == -1 and order(2, 1) == 1 and order(3, 3) == 0, "integers")
    assert_that(order('a', 'b') == -1, "strings")
    assert_that(ObjStream.of('b', 'c', 'a').sorted(order).to_list() == ['a', 'b', 'c'], "as a sort comparator")


# sibling streams

@test("double stream terminals")
def test_double_stream():
    assert_that(from_range(1, 4).as_double_stream().average() == 2.0, "average")
    assert_that(DoubleStream.of(0.1, 0.2, 0.3).sum() == math.fsum([0.1, 0.2, 0.3]), "exact sum")
    assert_that(DoubleStream.of(2.5, -1.5).min() == -1.5, "min")
    assert_that(DoubleStream.of().max() is None, "empty max")


@test("object stream sorting and extrema")
def test_obj_stream():
    assert_that(ObjStream.of(3, 1, 2).sorted(reverse_order()).map_to_long().to_list() == [3, 2, 1],
                "sort then unbox")
    words = lambda: ObjStream.of('bb', 'a', 'cc')
    by_length = lambda a, b: compare_long(len(a), len(b))
    assert_that(words().min(by_length) == 'a', "shortest word")
    assert_that(words().max(by_length) == 'bb', "object max keeps the earlier of equals")
    assert_that(ObjStream.of('x').map_to_long(len).to_list() == [1], "map_to_long with mapper")


if __name__ == "__main__":
    suite.main(title="streamex stream primitives test suite")
