"""
Core data and analytics layer.

This package contains:
- models: canonical records (Question, Company, FilterCriteria, AggregateResult)
- normalizer: raw dataset entries -> canonical records with defaults
- data_loader: read the dataset (local JSON or URL) once per process
- filter_pipeline: company search + facet filters
- aggregation: topic distribution, repeated questions, year histogram
"""
