from .dynamodb_distributed_lock import DynamoDBDistributedLock as DynamoDBDistributedLock
