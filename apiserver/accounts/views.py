import logging

from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework import status
from rest_framework_simplejwt.tokens import RefreshToken

from .models import User
from .serializers import LoginSerializer, UserSerializer

logger = logging.getLogger(__name__)


@api_view(['POST'])
@permission_classes([AllowAny])
def register_user(request):
    """Create a login account. Employees are registered against its id."""
    username = request.data.get('username')
    password = request.data.get('password')

    if not username or not password:
        return Response({
            'message': 'Username and password are required'
        }, status=status.HTTP_400_BAD_REQUEST)

    if User.objects.filter(username=username).exists():
        return Response({
            'message': 'User with this username already exists'
        }, status=status.HTTP_400_BAD_REQUEST)

    try:
        user = User.objects.create_user(
            username=username,
            password=password,
            email=request.data.get('email', ''),
            first_name=request.data.get('first_name', ''),
            last_name=request.data.get('last_name', ''),
        )
    except Exception as e:
        logger.error(f"Login account registration failed: {str(e)}", exc_info=True)
        return Response({
            'message': 'Internal Server Error'
        }, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

    logger.info(f"Login account registered: {user.username} (id={user.id})")
    return Response({
        'message': 'User created successfully',
        'user': UserSerializer(user).data
    }, status=status.HTTP_201_CREATED)


@api_view(['POST'])
@permission_classes([AllowAny])
def login_user(request):
    """User login endpoint"""
    username = request.data.get('username')
    password = request.data.get('password')

    if not username or not password:
        return Response({
            'message': 'Username and password are required'
        }, status=status.HTTP_400_BAD_REQUEST)

    serializer = LoginSerializer(data={'username': username, 'password': password})
    if not serializer.is_valid():
        return Response({
            'message': 'Invalid credentials'
        }, status=status.HTTP_401_UNAUTHORIZED)

    user = serializer.validated_data['user']
    refresh = RefreshToken.for_user(user)

    return Response({
        'message': 'Login successful',
        'access': str(refresh.access_token),
        'refresh': str(refresh),
        'user': UserSerializer(user).data
    }, status=status.HTTP_200_OK)
