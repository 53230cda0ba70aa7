"""Unit tests for DynamoDBService paging with a mocked table resource."""

from unittest.mock import MagicMock

import pytest
from boto3.dynamodb.conditions import Key

from portal_shared.services.dynamodb import DynamoDBService


@pytest.fixture
def table() -> MagicMock:
    return MagicMock()


@pytest.fixture
def service(table: MagicMock) -> DynamoDBService:
    db = DynamoDBService(environment="test")
    db._dynamodb = MagicMock()
    db._dynamodb.Table.return_value = table
    return db


class TestQueryPaging:
    """Tests for DynamoDBService.query across LastEvaluatedKey pages."""

    def test_follows_last_evaluated_key(
        self, service: DynamoDBService, table: MagicMock
    ) -> None:
        table.query.side_effect = [
            {"Items": [{"booking_id": "b1"}], "LastEvaluatedKey": {"booking_id": "b1"}},
            {"Items": [{"booking_id": "b2"}]},
        ]

        items = service.query("bookings", Key("hotel_id").eq("h1"), index_name="hotel_id-index")

        assert [i["booking_id"] for i in items] == ["b1", "b2"]
        assert table.query.call_count == 2
        assert table.query.call_args_list[1].kwargs["ExclusiveStartKey"] == {"booking_id": "b1"}
        assert "ExclusiveStartKey" not in table.query.call_args_list[0].kwargs

    def test_stops_once_limit_is_reached(
        self, service: DynamoDBService, table: MagicMock
    ) -> None:
        table.query.side_effect = [
            {
                "Items": [{"booking_id": "b1"}, {"booking_id": "b2"}],
                "LastEvaluatedKey": {"booking_id": "b2"},
            },
        ]

        items = service.query("bookings", Key("hotel_id").eq("h1"), limit=2)

        assert len(items) == 2
        table.query.assert_called_once()

    def test_bookings_for_hotel_read_every_page(
        self, service: DynamoDBService, table: MagicMock
    ) -> None:
        table.query.side_effect = [
            {"Items": [{"booking_id": f"b{i}"} for i in range(3)], "LastEvaluatedKey": {"k": 1}},
            {"Items": [{"booking_id": "b3"}], "LastEvaluatedKey": {"k": 2}},
            {"Items": [{"booking_id": "b4"}]},
        ]

        items = service.get_bookings_for_hotel("h1")

        assert len(items) == 5
        assert table.query.call_args_list[0].kwargs["ScanIndexForward"] is False
