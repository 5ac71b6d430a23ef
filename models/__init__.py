from models.template import SeatRange, SeatTemplate
from models.route import RouteDeclaration, DirectionRequest, ResolvedDirection
from models.rolling_stock import Coach, TravelClass, CoachAssignment, Train, FallbackCoach
from models.classification import GridSeat, SeatClassification, CoachOutcome, TrainSeatReport
