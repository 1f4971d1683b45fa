from rest_framework.decorators import api_view, permission_classes
from rest_framework.exceptions import NotAuthenticated, PermissionDenied
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from clinic.models import Doctor, Patient, Review, ReviewDoctor
from clinic.serializers.review import ReviewSerializer
from clinic.services import reviews


def _author_or_error(request, role: str):
    user = request.user
    if not (user and user.is_authenticated):
        raise NotAuthenticated('Login required to submit a review')
    if user.role != role:
        raise PermissionDenied(f'Only {role}s can submit this review')
    return user


@api_view(['GET', 'POST'])
@permission_classes([AllowAny])
def patient_reviews(request):
    if request.method == 'GET':
        return Response({'success': True, 'data': [reviews.format_review(r) for r in reviews.sample(Review)]})
    patient = _author_or_error(request, Patient.ROLE)
    s = ReviewSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    review = reviews.submit_patient_review(patient, s.validated_data.get('rating'), s.validated_data.get('review_message'))
    return Response({'success': True, 'message': 'Review submitted successfully', 'data': reviews.format_review(review)})


@api_view(['GET', 'POST'])
@permission_classes([AllowAny])
def doctor_reviews(request):
    if request.method == 'GET':
        return Response({'success': True, 'data': [reviews.format_review(r) for r in reviews.sample(ReviewDoctor)]})
    doctor = _author_or_error(request, Doctor.ROLE)
    s = ReviewSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    review = reviews.submit_doctor_review(doctor, s.validated_data.get('rating'), s.validated_data.get('review_message'))
    return Response({'success': True, 'message': 'Review submitted successfully', 'data': reviews.format_review(review)})
