from .money import Money as Money
from .place_id import PlaceId as PlaceId
from .product_id import ProductId as ProductId
from .reservation_id import ReservationId as ReservationId
from .room_id import RoomId as RoomId
from .time_range import TimeRange as TimeRange
