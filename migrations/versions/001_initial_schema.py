"""Initial schema

Revision ID: 001
Revises:
Create Date: 2026-10-18 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '001'
down_revision = None
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
    ]


def upgrade() -> None:
    # Create profiles table
    op.create_table(
        'profiles',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.String(length=64), nullable=False),
        sa.Column('user_type', sa.String(length=20), nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('phone', sa.String(length=20), nullable=False),
        sa.Column('qr_code', sa.String(length=64), nullable=True),
        sa.Column('is_verified', sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_profiles_id', 'profiles', ['id'], unique=False)
    op.create_index('ix_profiles_user_id', 'profiles', ['user_id'], unique=True)
    op.create_index('ix_profiles_user_type', 'profiles', ['user_type'], unique=False)
    op.create_index('ix_profiles_qr_code', 'profiles', ['qr_code'], unique=True)

    # Create role tables
    op.create_table(
        'patient_profiles',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('profile_id', sa.Integer(), nullable=False),
        sa.Column('date_of_birth', sa.Date(), nullable=False),
        sa.Column('age', sa.Integer(), nullable=False),
        sa.Column('sex', sa.String(length=20), nullable=False),
        sa.Column('address', sa.Text(), nullable=False),
        sa.Column('aadhaar_number', sa.String(length=12), nullable=True),
        sa.Column('aadhaar_verified', sa.Boolean(), nullable=False),
        sa.Column('aadhaar_verified_at', sa.DateTime(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['profile_id'], ['profiles.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('profile_id'),
    )
    op.create_index('ix_patient_profiles_id', 'patient_profiles', ['id'], unique=False)
    op.create_index('ix_patient_profiles_aadhaar_number', 'patient_profiles', ['aadhaar_number'], unique=False)

    op.create_table(
        'doctor_profiles',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('profile_id', sa.Integer(), nullable=False),
        sa.Column('imr_license', sa.String(length=32), nullable=False),
        sa.Column('imr_verified', sa.Boolean(), nullable=False),
        sa.Column('specialization', sa.String(length=100), nullable=False),
        sa.Column('experience', sa.Integer(), nullable=False),
        sa.Column('license_details', sa.JSON(), nullable=True),
        sa.Column('verified_at', sa.DateTime(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['profile_id'], ['profiles.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('profile_id'),
    )
    op.create_index('ix_doctor_profiles_id', 'doctor_profiles', ['id'], unique=False)
    op.create_index('ix_doctor_profiles_imr_license', 'doctor_profiles', ['imr_license'], unique=False)

    op.create_table(
        'pharmacist_profiles',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('profile_id', sa.Integer(), nullable=False),
        sa.Column('pharmacy_name', sa.String(length=200), nullable=False),
        sa.Column('operating_hours', sa.String(length=100), nullable=False),
        sa.Column('pmc_license', sa.String(length=32), nullable=False),
        sa.Column('pmc_verified', sa.Boolean(), nullable=False),
        sa.Column('license_details', sa.JSON(), nullable=True),
        sa.Column('verified_at', sa.DateTime(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['profile_id'], ['profiles.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('profile_id'),
    )
    op.create_index('ix_pharmacist_profiles_id', 'pharmacist_profiles', ['id'], unique=False)
    op.create_index('ix_pharmacist_profiles_pmc_license', 'pharmacist_profiles', ['pmc_license'], unique=False)

    # Create medications table
    op.create_table(
        'medications',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('generic_name', sa.String(length=255), nullable=True),
        sa.Column('strength', sa.String(length=50), nullable=False),
        sa.Column('dosage_form', sa.String(length=50), nullable=False),
        sa.Column('manufacturer', sa.String(length=200), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('side_effects', sa.JSON(), nullable=True),
        sa.Column('contraindications', sa.JSON(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_medications_id', 'medications', ['id'], unique=False)
    op.create_index('ix_medications_name', 'medications', ['name'], unique=False)

    # Create medical_records table
    op.create_table(
        'medical_records',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('patient_profile_id', sa.Integer(), nullable=False),
        sa.Column('doctor_profile_id', sa.Integer(), nullable=False),
        sa.Column('diagnosis', sa.Text(), nullable=False),
        sa.Column('symptoms', sa.JSON(), nullable=True),
        sa.Column('vital_signs', sa.JSON(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('visit_date', sa.Date(), nullable=False),
        sa.Column('follow_up_date', sa.Date(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['patient_profile_id'], ['patient_profiles.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['doctor_profile_id'], ['doctor_profiles.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_medical_records_id', 'medical_records', ['id'], unique=False)
    op.create_index('ix_medical_records_patient_profile_id', 'medical_records', ['patient_profile_id'], unique=False)
    op.create_index('ix_medical_records_doctor_profile_id', 'medical_records', ['doctor_profile_id'], unique=False)
    op.create_index('ix_medical_records_visit_date', 'medical_records', ['visit_date'], unique=False)

    # Create prescriptions table
    op.create_table(
        'prescriptions',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('patient_profile_id', sa.Integer(), nullable=False),
        sa.Column('doctor_profile_id', sa.Integer(), nullable=False),
        sa.Column('medical_record_id', sa.Integer(), nullable=False),
        sa.Column('prescription_number', sa.String(length=20), nullable=False),
        sa.Column('issued_date', sa.Date(), nullable=False),
        sa.Column('valid_until', sa.Date(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('status', sa.String(length=30), nullable=False),
        sa.Column('cancelled_at', sa.DateTime(), nullable=True),
        sa.Column('cancelled_by_pharmacist_id', sa.Integer(), nullable=True),
        sa.Column('cancellation_reason', sa.Text(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['patient_profile_id'], ['patient_profiles.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['doctor_profile_id'], ['doctor_profiles.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['medical_record_id'], ['medical_records.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['cancelled_by_pharmacist_id'], ['pharmacist_profiles.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('prescription_number'),
    )
    op.create_index('ix_prescriptions_id', 'prescriptions', ['id'], unique=False)
    op.create_index('ix_prescriptions_patient_profile_id', 'prescriptions', ['patient_profile_id'], unique=False)
    op.create_index('ix_prescriptions_doctor_profile_id', 'prescriptions', ['doctor_profile_id'], unique=False)
    op.create_index('ix_prescriptions_issued_date', 'prescriptions', ['issued_date'], unique=False)
    op.create_index('ix_prescriptions_status', 'prescriptions', ['status'], unique=False)

    op.create_table(
        'prescription_items',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('prescription_id', sa.Integer(), nullable=False),
        sa.Column('medication_id', sa.Integer(), nullable=False),
        sa.Column('dosage_instructions', sa.Text(), nullable=False),
        sa.Column('frequency', sa.String(length=100), nullable=False),
        sa.Column('duration_days', sa.Integer(), nullable=True),
        sa.Column('quantity', sa.Integer(), nullable=False),
        sa.Column('dispensed_quantity', sa.Integer(), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('dispensed_at', sa.DateTime(), nullable=True),
        sa.Column('dispensed_by_pharmacist_id', sa.Integer(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['prescription_id'], ['prescriptions.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['medication_id'], ['medications.id']),
        sa.ForeignKeyConstraint(['dispensed_by_pharmacist_id'], ['pharmacist_profiles.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_prescription_items_id', 'prescription_items', ['id'], unique=False)
    op.create_index('ix_prescription_items_prescription_id', 'prescription_items', ['prescription_id'], unique=False)

    # Create pharmacy_inventory table
    op.create_table(
        'pharmacy_inventory',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('pharmacist_profile_id', sa.Integer(), nullable=False),
        sa.Column('medication_id', sa.Integer(), nullable=False),
        sa.Column('current_stock', sa.Integer(), nullable=False),
        sa.Column('minimum_stock_level', sa.Integer(), nullable=False),
        sa.Column('maximum_stock_level', sa.Integer(), nullable=False),
        sa.Column('expiry_date', sa.Date(), nullable=True),
        sa.Column('batch_number', sa.String(length=64), nullable=True),
        sa.Column('supplier', sa.String(length=200), nullable=True),
        sa.Column('unit_cost', sa.Float(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['pharmacist_profile_id'], ['pharmacist_profiles.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['medication_id'], ['medications.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_pharmacy_inventory_id', 'pharmacy_inventory', ['id'], unique=False)
    op.create_index('ix_pharmacy_inventory_pharmacist_profile_id', 'pharmacy_inventory', ['pharmacist_profile_id'], unique=False)
    op.create_index('ix_pharmacy_inventory_medication_id', 'pharmacy_inventory', ['medication_id'], unique=False)

    # Create medication_notifications table
    op.create_table(
        'medication_notifications',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('patient_profile_id', sa.Integer(), nullable=False),
        sa.Column('prescription_item_id', sa.Integer(), nullable=False),
        sa.Column('notification_time', sa.DateTime(), nullable=False),
        sa.Column('message', sa.Text(), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['patient_profile_id'], ['patient_profiles.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['prescription_item_id'], ['prescription_items.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_medication_notifications_id', 'medication_notifications', ['id'], unique=False)
    op.create_index('ix_medication_notifications_patient_profile_id', 'medication_notifications', ['patient_profile_id'], unique=False)
    op.create_index('ix_medication_notifications_notification_time', 'medication_notifications', ['notification_time'], unique=False)


def downgrade() -> None:
    op.drop_table('medication_notifications')
    op.drop_table('pharmacy_inventory')
    op.drop_table('prescription_items')
    op.drop_table('prescriptions')
    op.drop_table('medical_records')
    op.drop_table('medications')
    op.drop_table('pharmacist_profiles')
    op.drop_table('doctor_profiles')
    op.drop_table('patient_profiles')
    op.drop_table('profiles')
