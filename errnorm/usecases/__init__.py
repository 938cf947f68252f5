"""Use cases exposing failure normalization to the presentation layer."""
