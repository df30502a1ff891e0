"""Release notes pipeline: collect, classify, render and publish."""
