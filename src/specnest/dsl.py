"""Top-level entry points.

Each function declares a root group, runs it immediately and terminates
the process with a failure status when an example fails or errors:

    from specnest import describe
    from specnest.matchers import eq

    def array_spec(g):
        g.it("is empty", lambda s: s.expect(s.subject).to(eq([])))

    describe(list, array_spec)

Use `build_group` together with `Driver` to run a tree without exiting.
"""

from specnest.core.types import Description, ExampleBody
from specnest.reporting.driver import Driver, RunResult, run_or_exit
from specnest.structure.builder import DeclarationBlock, build_group


def describe(
    target: Description,
    block: DeclarationBlock | None = None,
    *,
    driver: Driver | None = None,
):
    """Declare and run a root group describing `target`.

    A class (or any non-string value) becomes the described target that
    supplies the implicit subject. Without `block` a decorator is returned.
    """
    if block is None:

        def decorator(func: DeclarationBlock) -> DeclarationBlock:
            describe(target, func, driver=driver)
            return func

        return decorator

    return run_or_exit(build_group(target, block), driver)


def context(
    description: str,
    block: DeclarationBlock | None = None,
    *,
    driver: Driver | None = None,
):
    """Declare and run a root group for a scenario.

    Unlike `describe`, a context never registers a described target.
    """
    if block is None:

        def decorator(func: DeclarationBlock) -> DeclarationBlock:
            context(description, func, driver=driver)
            return func

        return decorator

    return run_or_exit(build_group(str(description), block), driver)


def it(
    description: str | None = None,
    body: ExampleBody | None = None,
    *,
    driver: Driver | None = None,
) -> RunResult:
    """Declare and run a single example outside any group."""
    root = build_group(None, lambda g: g.example(description, body))
    return run_or_exit(root, driver)


def pending(message: str, *, driver: Driver | None = None) -> RunResult:
    """Report a pending example outside any group."""
    root = build_group(None, lambda g: g.pending_example(message))
    return run_or_exit(root, driver)
