def query_all(table, **kwargs) -> list[dict]:
    """クエリを実行し、LastEvaluatedKey をたどって全ページを読み込む"""
    items: list[dict] = []
    while True:
        response = table.query(**kwargs)
        items.extend(response.get("Items", []))
        if "LastEvaluatedKey" not in response:
            return items
        kwargs["ExclusiveStartKey"] = response["LastEvaluatedKey"]


def is_conditional_check_failure(error) -> bool:
    return error.response["Error"]["Code"] == "ConditionalCheckFailedException"
