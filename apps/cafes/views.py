from rest_framework import status, serializers as drf_serializers
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes

from .serializers import CafeSerializer, CafeCreateSerializer
from .services import (
    create_cafe,
    get_cafe,
    list_cafes,
    CafeNotFoundError,
    InvalidCafeDataError,
)


class ErrorResponseSerializer(drf_serializers.Serializer):
    error = drf_serializers.CharField()


@extend_schema(
    methods=['GET'],
    parameters=[
        OpenApiParameter('search', OpenApiTypes.STR, description='Search in cafe name or city'),
    ],
    responses={200: CafeSerializer(many=True)},
    description="List cafes with your drink count and last visit for each.",
    tags=['cafes'],
)
@extend_schema(
    methods=['POST'],
    request=CafeCreateSerializer,
    responses={201: CafeSerializer, 200: CafeSerializer, 400: ErrorResponseSerializer},
    description="Create a cafe. Returns 200 with the existing cafe when place_id is already known.",
    tags=['cafes'],
)
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def cafe_list(request):
    """List or create cafes."""
    if request.method == 'GET':
        cafes = list_cafes(user=request.user, search=request.query_params.get('search', ''))
        return Response(CafeSerializer(cafes, many=True).data)

    serializer = CafeCreateSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    try:
        cafe, created = create_cafe(**serializer.validated_data)
    except InvalidCafeDataError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response(
        CafeSerializer(cafe).data,
        status=status.HTTP_201_CREATED if created else status.HTTP_200_OK
    )


@extend_schema(
    responses={200: CafeSerializer, 404: ErrorResponseSerializer},
    description="Get a single cafe.",
    tags=['cafes'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def cafe_detail(request, cafe_id):
    """Get a single cafe."""
    try:
        cafe = get_cafe(cafe_id=cafe_id)
    except CafeNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

    return Response(CafeSerializer(cafe).data)
