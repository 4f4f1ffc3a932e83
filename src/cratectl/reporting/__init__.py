"""Run reporting: text diagnostics and the JSON run report."""
