NOT_INFORMED = "Not informed"

INTERVIEW_OPENING = (
    "Let's simulate a job interview. Start by asking the candidate the first question."
)

ASSISTANT_NAME = "IA do Emprego"


def field(fields, name):
    """Field value as text, or the placeholder when absent or blank."""
    value = fields.get(name)
    if value is None or value == "":
        return NOT_INFORMED
    return value if isinstance(value, str) else str(value)


def create_resume(fields):
    return (
        "Generate a complete, professional résumé from the data below. Include an "
        "\"About me\" section and format it so it is easy to read.\n"
        f"Name: {field(fields, 'name')}\n"
        f"Age: {field(fields, 'age')}\n"
        f"City: {field(fields, 'city')}\n"
        f"Objective: {field(fields, 'objective')}\n"
        f"Education: {field(fields, 'education')}\n"
        f"Experience: {field(fields, 'experience')}\n"
        f"Skills: {field(fields, 'skills')}\n"
        f"Contact: {field(fields, 'contact')}\n"
    )


def search_jobs(fields):
    return (
        f"List 3 to 5 job openings available in the city of {field(fields, 'city')} "
        "across a variety of fields. Include the job title, the company and a short "
        "description. Format it as a clear list."
    )


def review_resume(fields):
    return (
        "Analyze the résumé below and give constructive feedback. Point out its "
        "strengths and the areas to improve, with specific suggestions.\n"
        f"Résumé:\n{field(fields, 'text')}\n"
    )


def ideal_profession(fields):
    return (
        "Based on the following interests and skills, suggest 3 to 5 ideal professions "
        "and briefly explain why each one is a good fit.\n"
        f"Interests/Skills: {field(fields, 'interests')}\n"
    )


def free_courses(fields):
    return (
        "List 5 high-quality free online courses that are relevant to today's job "
        "market. Include the course name, the platform and a short description."
    )


def fair_salary(fields):
    return (
        f"What would be a fair salary estimate for the role of {field(fields, 'role')} "
        f"in the city of {field(fields, 'city')}? Consider the typical experience for "
        "this role."
    )


def youth_program(fields):
    return (
        "Explain the Young Apprentice (Jovem Aprendiz) program and its age requirements. "
        f"Given the age {field(fields, 'age')}, say whether the person is eligible and "
        "what they should do next."
    )


def welcome(fields):
    return (
        "Write a warm, encouraging welcome message for a smart career assistant called "
        f"\"{ASSISTANT_NAME}\". Say it is ready to help with résumés, job searches, "
        "interview practice, résumé reviews, career suggestions, free courses, salary "
        "estimates and the Young Apprentice program, and invite the user to get started."
    )
