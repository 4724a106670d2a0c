"""AWS adapters (boto3)."""
