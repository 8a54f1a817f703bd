from .day_of_week import DayOfWeek as DayOfWeek
from .time_slot import TimeSlot as TimeSlot
