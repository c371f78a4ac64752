from rest_framework import status, serializers as drf_serializers
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework_simplejwt.tokens import RefreshToken
from drf_spectacular.utils import extend_schema

from .serializers import (
    UserSerializer,
    RegisterSerializer,
    LoginSerializer,
    ProfileUpdateSerializer,
)
from .services import (
    register_user,
    authenticate_user,
    update_profile,
    AccountsServiceError,
    UserRegistrationError,
    InvalidCredentialsError,
    InactiveAccountError,
)

ERROR_STATUS = {
    UserRegistrationError: status.HTTP_400_BAD_REQUEST,
    InvalidCredentialsError: status.HTTP_401_UNAUTHORIZED,
    InactiveAccountError: status.HTTP_403_FORBIDDEN,
}


class TokenPairSerializer(drf_serializers.Serializer):
    refresh = drf_serializers.CharField()
    access = drf_serializers.CharField()


class SessionSerializer(drf_serializers.Serializer):
    user = UserSerializer()
    tokens = TokenPairSerializer()


class ErrorResponseSerializer(drf_serializers.Serializer):
    error = drf_serializers.CharField()
    code = drf_serializers.CharField()


def _error(exc: AccountsServiceError) -> Response:
    http_status = ERROR_STATUS.get(type(exc), status.HTTP_400_BAD_REQUEST)
    return Response({'error': str(exc), 'code': exc.code}, status=http_status)


def _session(user, http_status=status.HTTP_200_OK) -> Response:
    """User profile plus a fresh JWT pair."""
    refresh = RefreshToken.for_user(user)
    return Response({
        'user': UserSerializer(user).data,
        'tokens': {'refresh': str(refresh), 'access': str(refresh.access_token)},
    }, status=http_status)


@extend_schema(
    request=RegisterSerializer,
    responses={201: SessionSerializer, 400: ErrorResponseSerializer},
    description="Create an account and sign in.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def register(request):
    serializer = RegisterSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        user = register_user(**serializer.validated_data)
    except AccountsServiceError as e:
        return _error(e)

    return _session(user, status.HTTP_201_CREATED)


@extend_schema(
    request=LoginSerializer,
    responses={
        200: SessionSerializer,
        401: ErrorResponseSerializer,
        403: ErrorResponseSerializer,
    },
    description="Sign in with email and password.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def login(request):
    serializer = LoginSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        user = authenticate_user(**serializer.validated_data)
    except AccountsServiceError as e:
        return _error(e)

    return _session(user)


@extend_schema(
    methods=['GET'],
    responses={200: UserSerializer},
    description="Your profile.",
    tags=['auth'],
)
@extend_schema(
    methods=['PATCH'],
    request=ProfileUpdateSerializer,
    responses={200: UserSerializer, 400: ErrorResponseSerializer},
    description="Change your display name.",
    tags=['auth'],
)
@api_view(['GET', 'PATCH'])
@permission_classes([IsAuthenticated])
def current_user(request):
    if request.method == 'PATCH':
        serializer = ProfileUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            update_profile(user=request.user, **serializer.validated_data)
        except AccountsServiceError as e:
            return _error(e)

    return Response(UserSerializer(request.user).data)
