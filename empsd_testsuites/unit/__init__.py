"""Browser-free unit tests for the page-object layer."""
