"""Interpretation and classification of NHCX FHIR bundles."""
