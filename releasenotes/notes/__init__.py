"""Release notes: filter models, BigQuery query building and repository"""
