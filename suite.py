import sys
import time
from contextlib import contextmanager
from functools import wraps
from typing import List, Dict, Any, Callable, Iterator, Optional, Type

_suite_state: Dict[str, List[Dict[str, Any]]] = {
    'tests': [],
    'results': []
}

PASS_FACE = '(^ ω ^)'
FAIL_FACE = '(ﾉಥДಥ)ﾉ'
SUMMARY_FACE = '☆*:.｡.o(≧▽≦)o.｡.:*☆'


class _c:
    """a tiny, silent class for holding color codes."""
    ok = '\033[92m'
    fail = '\033[91m'
    warn = '\033[93m'
    info = '\033[94m'
    grey = '\033[90m'
    reset = '\033[0m'


# --- custom exception for assertions ---

class TestAssertionError(AssertionError):
    """custom error to distinguish assertion failures from other exceptions."""
    __test__ = False


class _Raised:
    """filled in by assert_raises once the block has run."""
    def __init__(self):
        self.exception: Optional[BaseException] = None


# --- public api ---

def test(description: str) -> Callable:
    """decorator to register a function as a test case. the function stays a plain callable for pytest."""

    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args, **kwargs):
            return func(*args, **kwargs)

        _suite_state['tests'].append({'func': wrapper, 'description': description})
        return wrapper

    return decorator


# keep pytest from collecting the decorator itself
test.__test__ = False


def assert_that(condition: Any, message: str = "assertion failed") -> None:
    """custom assertion that raises a specific, catchable error type."""
    if not condition:
        raise TestAssertionError(message)


@contextmanager
def assert_raises(expected: Type[BaseException], message: str = "") -> Iterator[_Raised]:
    """asserts that the block raises expected (or a subclass); the caught exception lands on the yielded holder."""
    raised = _Raised()
    try:
        yield raised
    except expected as e:
        raised.exception = e
        return
    raise TestAssertionError(message or f"expected {expected.__name__} to be raised")


def run(title: str = "test run") -> bool:
    """executes all registered tests, prints a report and returns true when everything passed."""
    print(f"\n{_c.info}--- starting: {title} ---{_c.reset}")
    start_time = time.perf_counter()

    _suite_state['results'] = []

    for test_item in _suite_state['tests']:
        description = test_item['description']
        error = None

        try:
            test_item['func']()
        except TestAssertionError as e:
            error = f"assertion failed: {e}"
        except Exception as e:
            error = f"{type(e).__name__}: {e}"

        _suite_state['results'].append({'passed': error is None, 'description': description, 'error': error})

        if error is None:
            print(f"  {_c.ok}✔ pass{_c.reset}  {PASS_FACE}  {description}")
        else:
            print(f"  {_c.fail}✖ fail{_c.reset}  {FAIL_FACE}  {description}")
            print(f"    {_c.grey}└─> {error}{_c.reset}")

    all_passed = _print_summary(start_time)

    # clear tests after run to allow for multiple, separate suite runs in a single script
    _suite_state['tests'] = []
    return all_passed


def main(title: str) -> None:
    """script entry point: run the registered tests and exit non-zero on failure."""
    sys.exit(0 if run(title) else 1)


def _print_summary(start_time: float) -> bool:
    """prints the final summary of the test run."""
    duration = (time.perf_counter() - start_time) * 1000
    results = _suite_state['results']

    total = len(results)
    passed_count = sum(1 for r in results if r['passed'])
    failed_count = total - passed_count

    summary_color = _c.ok if failed_count == 0 else _c.fail

    print(f"\n{summary_color}--- summary ---{_c.reset}")
    print(f"  {SUMMARY_FACE}  ran {_c.info}{total}{_c.reset} tests in {_c.warn}{duration:.2f}ms{_c.reset}")
    print(f"  {_c.ok}passed: {passed_count}{_c.reset}, {_c.fail}failed: {failed_count}{_c.reset}")
    print(f"{summary_color}---------------{_c.reset}\n")
    return failed_count == 0
