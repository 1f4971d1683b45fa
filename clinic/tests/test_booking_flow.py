"""
End-to-end consultation flow.

A registered doctor logs in through both steps, a patient books and pays,
the doctor schedules the video meeting, closes the appointment and writes
a prescription the patient can then read.  Everything goes through the
public endpoints with DRF's APIClient.

To run the tests:

```
pytest -q clinic/tests
```
"""
from django.core import mail
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient, APITestCase

from ..models import BmdcDoctor, Doctor, Patient


class ConsultationFlowTests(APITestCase):
    def setUp(self) -> None:
        self.doctor = Doctor(
            username='dr_reed',
            name='Dr. Evelyn Reed',
            email='reed@clinic.example',
            bmdc_number='93481',
            speciality='Cardiology',
            location='Dhaka',
            designation='Consultant',
            qualification='MBBS, FCPS',
            about='Cardiologist.',
        )
        self.doctor.set_password('doctorpass')
        self.doctor.save()
        BmdcDoctor.objects.create(name='Dr. Evelyn Reed', bmdc='93481')

        self.patient_client = APIClient()
        self.doctor_client = APIClient()

    def register_patient(self):
        r = self.patient_client.post(reverse('register'), {
            'username': 'rahim',
            'fullName': 'Rahim Uddin',
            'email': 'rahim@example.com',
            'password': 'patientpass',
            'gender': 'Male',
            'dob': '1985-03-10',
            'nationalId': '1985031012345',
            'phone': '01711111111',
            'address': 'Mirpur, Dhaka',
        }, format='json')
        self.assertEqual(r.status_code, status.HTTP_201_CREATED)
        self.patient_client.credentials(HTTP_AUTHORIZATION=f"Bearer {r.data['token']}")
        return Patient.objects.get(username='rahim')

    def login_doctor(self):
        creds = {'username': 'dr_reed', 'password': 'doctorpass'}
        r = self.doctor_client.post(reverse('doctor_login'), dict(creds, action='validate'), format='json')
        self.assertEqual(r.status_code, status.HTTP_200_OK)
        r = self.doctor_client.post(reverse('doctor_login'), dict(creds, action='login', bmdcNumber='93481'),
                                    format='json')
        self.assertEqual(r.status_code, status.HTTP_200_OK)
        # the httpOnly cookie alone authenticates the dashboard

    def test_full_consultation(self):
        patient = self.register_patient()
        self.login_doctor()

        # Patient books and pays
        r = self.patient_client.post(reverse('appointments'), {
            'doctorId': self.doctor.pk,
            'appointmentDate': '2026-11-02',
            'appointmentDay': 'Monday',
            'appointmentTime': '10:00 AM',
        }, format='json')
        self.assertEqual(r.status_code, status.HTTP_201_CREATED)
        appt_id = r.data['data']['appointmentId']
        detail = reverse('appointment_detail', args=[appt_id])

        r = self.patient_client.patch(detail, {'paymentStatus': 'paid', 'paymentAmount': '500.00'}, format='json')
        self.assertEqual(r.data['data']['paymentStatus'], 'paid')
        self.assertEqual(r.data['data']['status'], 'pending')

        # Doctor sees it and schedules the meeting
        r = self.doctor_client.get(reverse('appointments'))
        self.assertEqual([a['appointmentId'] for a in r.data['data']], [appt_id])
        r = self.doctor_client.post(reverse('meeting_link'), {
            'appointmentId': appt_id,
            'meetingTime': '2026-11-02 10:00',
            'meetingLink': 'https://meet.example.com/rahim',
        }, format='json')
        self.assertTrue(r.data['data']['notified'])
        self.assertEqual(mail.outbox[-1].to, ['rahim@example.com'])

        # Doctor closes the appointment and writes the prescription
        r = self.doctor_client.patch(detail, {'status': 'Done'}, format='json')
        self.assertEqual(r.data['data']['status'], 'Done')
        self.assertEqual(r.data['data']['paymentStatus'], 'paid')
        r = self.doctor_client.post(reverse('prescriptions'), {
            'appointmentId': appt_id,
            'diagnosis': 'Stable angina',
            'chiefComplaint': 'Chest pain on exertion',
            'medications': [
                {'name': 'Aspirin', 'dosage': '75mg', 'frequency': '0+1+0', 'duration': '30 days'},
            ],
        }, format='json')
        self.assertEqual(r.status_code, status.HTTP_201_CREATED)
        self.assertEqual(r.data['data']['patientGender'], 'Male')

        # Patient reads it back
        r = self.patient_client.get(reverse('prescriptions'), {'appointmentId': appt_id})
        self.assertEqual(r.status_code, status.HTTP_200_OK)
        self.assertEqual(r.data['data']['diagnosis'], 'Stable angina')
        self.assertEqual(r.data['data']['patientId'], patient.pk)

    def test_unverified_doctor_gets_no_session(self):
        BmdcDoctor.objects.all().delete()
        r = self.doctor_client.post(reverse('doctor_login'), {
            'action': 'login', 'username': 'dr_reed', 'password': 'doctorpass', 'bmdcNumber': '93481',
        }, format='json')
        self.assertEqual(r.status_code, status.HTTP_403_FORBIDDEN)
        r = self.doctor_client.get(reverse('appointments'))
        self.assertEqual(r.status_code, status.HTTP_401_UNAUTHORIZED)
