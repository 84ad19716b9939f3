"""Transforms from registry documents to RangeSets."""
