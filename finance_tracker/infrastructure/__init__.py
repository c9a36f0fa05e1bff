"""Infrastructure adapters for the finance tracker."""
