"""Progress bounded context: daily progress buckets and accuracy achievements."""
