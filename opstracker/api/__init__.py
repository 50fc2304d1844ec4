"""Public JSON API for the operations tracker."""
