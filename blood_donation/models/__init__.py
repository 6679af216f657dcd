from blood_donation.models.user_model import User, UserRole
from blood_donation.models.donor_model import DonorProfile
from blood_donation.models.recipient_model import RecipientProfile
from blood_donation.models.blood_bank_model import BloodBank
from blood_donation.models.blood_stock_model import BloodStock
from blood_donation.models.blood_request_model import BloodRequest, RequestStatus
from blood_donation.models.donor_request_link_model import DonorRequestLink, ResponseStatus
from blood_donation.models.donation_record_model import DonationRecord, DonationStatus
from blood_donation.models.appointment_model import Appointment, AppointmentStatus
from blood_donation.models.notification_model import NotificationLog
