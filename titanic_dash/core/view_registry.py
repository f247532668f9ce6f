from __future__ import annotations

from typing import TYPE_CHECKING, Dict, List, Type

from .base_view import BaseView

if TYPE_CHECKING:
    from titanic_dash.services.dataset_service import DatasetAggregator


class ViewRegistry:
    """
    Registry for chart view classes so dashboards can be built from config

    Purpose:
    - Decouples the Dash layer from hardcoded chart implementations by exposing {@link create(view_id, aggregator)}
    - Lets each dashboard in global.json list its charts by id

    Design Notes:
    - Stores the subclasses of {@link BaseView}, not instances, so that each view can be instantiated on demand
    - Enforces invariants:
        * only {@link BaseView} subclasses can be registered
        * each view 'id' is unique across the registry
    """

    def __init__(self):
        self._views: Dict[str, Type[BaseView]] = {}

    def register(self, view_cls: Type[BaseView]) -> None:
        """
        Register a {@link BaseView} with the registry

        :param view_cls: the subclass of {@link BaseView}

        Raises:
            TypeError: if view_cls is not a subclass of {@link BaseView}
            ValueError: if a view with same 'id' already exists
        """
        if not isinstance(view_cls, type) or not issubclass(view_cls, BaseView):
            raise TypeError(f"View '{getattr(view_cls, 'id', view_cls)}' must be a subclass of BaseView")

        if view_cls.id in self._views:
            raise ValueError(f"View '{view_cls.id}' already registered")

        self._views[view_cls.id] = view_cls

    def create(self, view_id: str, aggregator: DatasetAggregator) -> BaseView:
        """
        Instantiate a view for the given view_id.

        Raises:
            KeyError: if no view with the given id exists in the registry
        """
        try:
            cls = self._views[view_id]
        except KeyError:
            raise KeyError(f"View '{view_id}' not found")
        return cls(aggregator)

    def ids(self) -> List[str]:
        return list(self._views)

    def all_classes(self) -> List[Type[BaseView]]:
        return list(self._views.values())
