from rest_framework import status, serializers as drf_serializers
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes

from apps.rankings.services import RankingsServiceError
from apps.rankings.views import error_response as ranking_error_response
from .serializers import (
    DrinkSerializer,
    DrinkCreateSerializer,
    DrinkListQuerySerializer,
)
from .services import (
    create_drink,
    get_drink,
    delete_drink,
    get_user_drinks,
    get_drink_types,
    get_last_drink,
    DrinkNotFoundError,
    CafeNotFoundError,
    InvalidDrinkDataError,
)


class ErrorResponseSerializer(drf_serializers.Serializer):
    error = drf_serializers.CharField()


@extend_schema(
    methods=['GET'],
    parameters=[
        OpenApiParameter('cafe_id', OpenApiTypes.UUID, description='Only drinks from this cafe'),
        OpenApiParameter('sort', OpenApiTypes.STR, description='logged_at | rating | drink_type | price'),
        OpenApiParameter('order', OpenApiTypes.STR, description='asc | desc'),
    ],
    responses={200: DrinkSerializer(many=True), 400: ErrorResponseSerializer},
    description="List your logged drinks.",
    tags=['drinks'],
)
@extend_schema(
    methods=['POST'],
    request=DrinkCreateSerializer,
    responses={201: DrinkSerializer, 400: ErrorResponseSerializer, 404: ErrorResponseSerializer},
    description="Log a drink. It starts unranked.",
    tags=['drinks'],
)
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def drink_list(request):
    """List or log drinks."""
    if request.method == 'GET':
        query = DrinkListQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)

        drinks = get_user_drinks(user=request.user, **query.validated_data)
        return Response(DrinkSerializer(drinks, many=True).data)

    serializer = DrinkCreateSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    try:
        drink = create_drink(user=request.user, **serializer.validated_data)
    except CafeNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
    except InvalidDrinkDataError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response(DrinkSerializer(drink).data, status=status.HTTP_201_CREATED)


@extend_schema(
    responses={200: OpenApiTypes.STR},
    description="Distinct drink types you have logged.",
    tags=['drinks'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def drink_types(request):
    return Response(get_drink_types(user=request.user))


@extend_schema(
    responses={200: DrinkSerializer, 404: ErrorResponseSerializer},
    description="Your most recently logged drink.",
    tags=['drinks'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def last_drink(request):
    drink = get_last_drink(user=request.user)
    if drink is None:
        return Response({'error': 'No drinks logged yet'}, status=status.HTTP_404_NOT_FOUND)
    return Response(DrinkSerializer(drink).data)


@extend_schema(
    methods=['GET'],
    responses={200: DrinkSerializer, 404: ErrorResponseSerializer},
    description="Get one of your drinks.",
    tags=['drinks'],
)
@extend_schema(
    methods=['DELETE'],
    responses={204: None, 404: ErrorResponseSerializer, 409: ErrorResponseSerializer},
    description="Delete a drink. A ranked drink is removed from its tier first.",
    tags=['drinks'],
)
@api_view(['GET', 'DELETE'])
@permission_classes([IsAuthenticated])
def drink_detail(request, drink_id):
    """Get or delete a drink."""
    try:
        if request.method == 'GET':
            drink = get_drink(drink_id=drink_id, user=request.user)
            return Response(DrinkSerializer(drink).data)

        delete_drink(drink_id=drink_id, user=request.user)
        return Response(status=status.HTTP_204_NO_CONTENT)

    except DrinkNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
    except RankingsServiceError as e:
        return ranking_error_response(e)
