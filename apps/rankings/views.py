from rest_framework import status, serializers as drf_serializers
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiResponse, inline_serializer

from .serializers import (
    RankedDrinkSerializer,
    UnrankedDrinkSerializer,
    TierCountsSerializer,
    RankingCheckSerializer,
    RankingCreateSerializer,
    ReorderRequestSerializer,
    PlacementRequestSerializer,
    PlacementStateSerializer,
    ErrorResponseSerializer,
)
from .services import (
    insert_ranking,
    reorder_tier,
    delete_ranking,
    get_user_rankings,
    get_tier_rankings,
    get_unranked_drinks,
    get_tier_counts,
    check_drink_ranking,
    replay_placement,
    confirm_placement,
    RankingsServiceError,
    RankingValidationError,
    DrinkNotFoundError,
    RankingNotFoundError,
    DuplicateRankingError,
    ConcurrencyConflictError,
    RankingStorageError,
)

ERROR_STATUS = [
    (RankingValidationError, status.HTTP_400_BAD_REQUEST),
    (DrinkNotFoundError, status.HTTP_404_NOT_FOUND),
    (RankingNotFoundError, status.HTTP_404_NOT_FOUND),
    (DuplicateRankingError, status.HTTP_409_CONFLICT),
    (ConcurrencyConflictError, status.HTTP_409_CONFLICT),
    (RankingStorageError, status.HTTP_500_INTERNAL_SERVER_ERROR),
]


def error_response(exc: RankingsServiceError) -> Response:
    """Turn a rankings service error into an error response."""
    for exc_class, http_status in ERROR_STATUS:
        if isinstance(exc, exc_class):
            break
    else:
        http_status = status.HTTP_500_INTERNAL_SERVER_ERROR
    return Response({'error': str(exc), 'code': exc.code}, status=http_status)


def invalid_request(serializer) -> Response:
    return Response(
        {'error': 'Invalid request', 'code': 'validation_error', 'details': serializer.errors},
        status=status.HTTP_400_BAD_REQUEST,
    )


SuccessResponseSerializer = inline_serializer(
    name='RankingDeleteResponse',
    fields={'success': drf_serializers.BooleanField()},
)


@extend_schema(
    methods=['GET'],
    responses={200: RankedDrinkSerializer(many=True)},
    description="All your ranked drinks, best score first.",
    tags=['rankings'],
)
@extend_schema(
    methods=['POST'],
    request=RankingCreateSerializer,
    responses={
        201: RankedDrinkSerializer,
        400: ErrorResponseSerializer,
        404: ErrorResponseSerializer,
        409: ErrorResponseSerializer,
    },
    description=(
        "Rank a drink at a position inside a tier. Drinks at or below that "
        "position move down one place and the tier is rescored."
    ),
    tags=['rankings'],
)
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def ranking_list(request):
    """List rankings or rank a drink."""
    if request.method == 'GET':
        rankings = get_user_rankings(user=request.user)
        return Response(RankedDrinkSerializer(rankings, many=True).data)

    serializer = RankingCreateSerializer(data=request.data)
    if not serializer.is_valid():
        return invalid_request(serializer)

    data = serializer.validated_data
    try:
        ranking = insert_ranking(
            user=request.user,
            drink_id=data['drink_id'],
            tier=data['tier'],
            rank=data['rank'],
            expected_version=data.get('snapshot_version'),
        )
    except RankingsServiceError as e:
        return error_response(e)

    return Response(RankedDrinkSerializer(ranking).data, status=status.HTTP_201_CREATED)


@extend_schema(
    responses={200: RankedDrinkSerializer(many=True), 400: ErrorResponseSerializer},
    description="One tier in rank order.",
    tags=['rankings'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def tier_rankings(request, tier):
    try:
        rankings = get_tier_rankings(user=request.user, tier=tier)
    except RankingsServiceError as e:
        return error_response(e)
    return Response(RankedDrinkSerializer(rankings, many=True).data)


@extend_schema(
    responses={200: UnrankedDrinkSerializer(many=True)},
    description="Drinks you have logged but not ranked yet, newest first.",
    tags=['rankings'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def unranked_drinks(request):
    drinks = get_unranked_drinks(user=request.user)
    return Response(UnrankedDrinkSerializer(drinks, many=True).data)


@extend_schema(
    responses={200: TierCountsSerializer},
    description="Number of ranked drinks in each tier.",
    tags=['rankings'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def tier_counts(request):
    return Response(TierCountsSerializer(get_tier_counts(user=request.user)).data)


@extend_schema(
    responses={200: RankingCheckSerializer},
    description="Whether a drink is ranked, and where.",
    tags=['rankings'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def check_ranking(request, drink_id):
    result = check_drink_ranking(user=request.user, drink_id=drink_id)
    return Response(RankingCheckSerializer(result).data)


@extend_schema(
    request=ReorderRequestSerializer,
    responses={
        200: RankedDrinkSerializer(many=True),
        400: ErrorResponseSerializer,
        404: ErrorResponseSerializer,
        409: ErrorResponseSerializer,
    },
    description=(
        "Reassign ranks inside a tier. Drinks not listed keep their relative "
        "order and fill the remaining ranks."
    ),
    tags=['rankings'],
)
@api_view(['PUT'])
@permission_classes([IsAuthenticated])
def reorder_rankings(request):
    serializer = ReorderRequestSerializer(data=request.data)
    if not serializer.is_valid():
        return invalid_request(serializer)

    try:
        rankings = reorder_tier(
            user=request.user,
            tier=serializer.validated_data['tier'],
            rankings=serializer.validated_data['rankings'],
        )
    except RankingsServiceError as e:
        return error_response(e)

    return Response(RankedDrinkSerializer(rankings, many=True).data)


@extend_schema(
    responses={
        200: OpenApiResponse(response=SuccessResponseSerializer),
        404: ErrorResponseSerializer,
        409: ErrorResponseSerializer,
    },
    description="Remove a drink from its tier. The drink itself is kept.",
    tags=['rankings'],
)
@api_view(['DELETE'])
@permission_classes([IsAuthenticated])
def ranking_detail(request, drink_id):
    try:
        delete_ranking(user=request.user, drink_id=drink_id)
    except RankingsServiceError as e:
        return error_response(e)
    return Response({'success': True})


@extend_schema(
    request=PlacementRequestSerializer,
    responses={
        200: PlacementStateSerializer,
        201: RankedDrinkSerializer,
        400: ErrorResponseSerializer,
        404: ErrorResponseSerializer,
        409: ErrorResponseSerializer,
    },
    description=(
        "Place a drink by comparison. Send every answer so far; the response "
        "names the next drink to compare with, or the final rank. Send "
        "confirm=true with a complete set of answers to save the ranking."
    ),
    tags=['rankings'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def placement(request):
    serializer = PlacementRequestSerializer(data=request.data)
    if not serializer.is_valid():
        return invalid_request(serializer)

    data = serializer.validated_data
    try:
        session = replay_placement(
            user=request.user,
            drink_id=data['drink_id'],
            tier=data.get('tier'),
            choices=data['choices'],
            snapshot_version=data.get('snapshot_version'),
        )
        if data['confirm']:
            ranking = confirm_placement(user=request.user, session=session)
            return Response(RankedDrinkSerializer(ranking).data, status=status.HTTP_201_CREATED)
    except RankingsServiceError as e:
        return error_response(e)

    return Response(PlacementStateSerializer(session).data)
