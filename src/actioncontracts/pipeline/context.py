"""Shared data carrier for one action invocation."""

from typing import Any, Dict, Iterator, Mapping, Optional

__all__ = ['Context', 'ContextFailure']


class ContextFailure(Exception):
    """Raised by :meth:`Context.fail` to halt the running action.

    Hooks and the action body stop at the first failure; ``Action.run``
    swallows it and returns the failed context, ``Action.run_strict`` lets it
    propagate.
    """

    def __init__(self, context: "Context"):
        self.context = context
        super().__init__(context.get("message") or "Context failed")


class Context:
    """Mutable key/value data shared by the hooks and body of an action.

    Values are reachable as attributes and as items:

        context = Context(name="Billy")
        context.name             # 'Billy'
        context["name"]          # 'Billy'
        context.person = None    # set a value
        context.to_dict()        # {'name': 'Billy', 'person': None}
    """

    __slots__ = ("_data", "_failed")

    def __init__(self, data: Optional[Mapping[str, Any]] = None, **values):
        object.__setattr__(self, "_data", dict(data or {}))
        object.__setattr__(self, "_failed", False)
        self._data.update(values)

    @classmethod
    def build(cls, context=None, **values) -> "Context":
        """Reuse an existing Context or build one from a mapping and keywords."""
        if isinstance(context, Context):
            context._data.update(values)
            return context
        return cls(context, **values)

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self._data[name]
        except KeyError:
            raise AttributeError(f"Context has no value for {name!r}") from None

    def __setattr__(self, name: str, value: Any) -> None:
        self._data[name] = value

    def __delattr__(self, name: str) -> None:
        try:
            del self._data[name]
        except KeyError:
            raise AttributeError(name) from None

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __setitem__(self, key: str, value: Any) -> None:
        self._data[key] = value

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def update(self, values: Optional[Mapping[str, Any]] = None, **kwargs) -> None:
        self._data.update(values or {}, **kwargs)

    def to_dict(self) -> Dict[str, Any]:
        """Shallow copy of the current values."""
        return dict(self._data)

    @property
    def success(self) -> bool:
        return not self._failed

    @property
    def failure(self) -> bool:
        return self._failed

    @property
    def message(self) -> Optional[str]:
        return self._data.get("message")

    def fail(self, **payload) -> None:
        """Mark the invocation as failed and halt it.

        ``payload`` values are merged into the context first, e.g.
        ``context.fail(message="invalid_name")``.

        Raises
        ------
        ContextFailure
            Always.
        """
        self._data.update(payload)
        object.__setattr__(self, "_failed", True)
        raise ContextFailure(self)

    def __repr__(self):
        state = "failure" if self._failed else "success"
        return f"<Context {state} {self._data!r}>"
