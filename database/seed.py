"""
Seed data script for the Academic Records system.
Creates sample data for testing and demonstration.
"""
import random
from database import (
    get_db_context, init_db,
    User, Student, Subject, SubjectStudent, Grade
)


def seed_database():
    """Populate database with sample data."""

    with get_db_context() as db:
        # Clear existing data
        db.query(Grade).delete()
        db.query(SubjectStudent).delete()
        db.query(Student).delete()
        db.query(Subject).delete()
        db.query(User).delete()

        # Create Admin
        admin = User(email="admin@school.edu", name="Registrar Admin", role="admin")
        db.add(admin)
        db.flush()

        # Create Students
        profiles = [
            ("2024-0001", "Miguel", "Santos", "BSIT"),
            ("2024-0002", "Ana", "Reyes", "BSIT"),
            ("2024-0003", "Paolo", "Garcia", "BSCS"),
            ("2024-0004", "Sofia", "Cruz", "BSCS"),
            ("2024-0005", "Jose", "Mendoza", "BSIT"),
            ("2024-0006", "Bea", "Torres", "BSCS"),
        ]
        students = [
            Student(
                student_id=code,
                first_name=first,
                last_name=last,
                email=f"{first.lower()}.{last.lower()}@school.edu",
                year_level="1st Year",
                course=course,
            )
            for code, first, last, course in profiles
        ]
        db.add_all(students)
        db.flush()

        # Student accounts for the portal
        accounts = [
            User(email=s.email, name=s.full_name, role="student")
            for s in students
        ]
        db.add_all(accounts)
        db.flush()

        # Create Subjects
        subjects = [
            Subject(subject_code="IT101", subject_name="Introduction to Computing", units=3),
            Subject(subject_code="MATH101", subject_name="College Algebra", units=3),
            Subject(subject_code="ENG101", subject_name="Purposive Communication", units=3),
        ]
        db.add_all(subjects)
        db.flush()

        # Enroll every student in every subject
        enrollments = [
            SubjectStudent(subject_id=subject.id, student_id=student.id)
            for subject in subjects
            for student in students
        ]
        db.add_all(enrollments)
        db.flush()

        # Grades for the first two subjects; the third is left ungraded
        grades = []
        for subject in subjects[:2]:
            for student in students:
                grades.append(Grade(
                    subject_id=subject.id,
                    student_id=student.id,
                    prelim=round(random.uniform(65, 100), 1),
                    midterm=round(random.uniform(65, 100), 1),
                    semifinal=round(random.uniform(65, 100), 1),
                    final=round(random.uniform(65, 100), 1),
                    updated_by=admin.id,
                ))

        db.add_all(grades)
        db.commit()

        print("Database seeded successfully!")
        print(f"Created:")
        print(f"  - 1 admin")
        print(f"  - {len(students)} students")
        print(f"  - {len(subjects)} subjects")
        print(f"  - {len(enrollments)} enrollments")
        print(f"  - {len(grades)} grade rows")

        # Print some IDs for reference
        print("\nReference IDs:")
        print(f"  Admin: {(admin.id, admin.email)}")
        print(f"  Student accounts: {[(u.id, u.email) for u in accounts]}")
        print(f"  Subjects: {[(s.id, s.subject_code) for s in subjects]}")


if __name__ == "__main__":
    print("Initializing database...")
    init_db()
    print("Seeding database...")
    seed_database()
