"""Random pair sampling over vertex name pools."""
