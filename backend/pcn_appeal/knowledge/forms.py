from .base import CourtForm, FormField

_CONTACT_FIELDS = (
    FormField("name", "What is your full name, as it should appear on the form?"),
    FormField("address", "What is your full address, including postcode?"),
    FormField("phone", "What is the best phone number to reach you on?"),
    FormField("email", "What is your email address?"),
)

TEC_ADDRESS = (
    "Traffic Enforcement Centre, Northampton County Court,\n"
    "St Katharine's House, 21-27 St Katharine's Street, Northampton NN1 2LZ"
)

TE7_GROUNDS = {
    1: "I did not receive the Notice to Owner, the Charge Certificate or the Order for Recovery in time.",
    2: "I had moved address and the DVLA records had not yet been updated.",
    3: "I was prevented from filing by serious illness or hospitalisation.",
    4: "Other circumstances beyond my reasonable control prevented timely filing.",
}

TE9_GROUNDS = {
    1: "I did not receive the penalty charge notice.",
    2: (
        "I made representations about the penalty charge to the charging "
        "authority within 28 days of service of the Notice to Owner, but did "
        "not receive a rejection notice."
    ),
    3: (
        "I appealed to an adjudicator against the charging authority's decision "
        "to reject my representations, but had no response, the appeal had not "
        "been determined when the charge certificate was served, or the appeal "
        "was determined in my favour."
    ),
    4: "The penalty charge has been paid in full.",
}


TE7_FORM = CourtForm(
    id="te7",
    display_name="TE7 - Application to file a statement out of time",
    purpose=(
        "Asks the court for permission to file a TE9 witness statement after "
        "the normal deadline has passed."
    ),
    fields=_CONTACT_FIELDS
    + (
        FormField(
            "ground",
            "Why are you filing late? Reply with a number:\n"
            + "\n".join(f"{n}. {text}" for n, text in TE7_GROUNDS.items()),
        ),
        FormField(
            "statement",
            "In your own words, explain the circumstances of the delay "
            "(at least 20 characters).",
        ),
    ),
    grounds=TE7_GROUNDS,
    template=(
        "APPLICATION TO FILE A STATEMENT OUT OF TIME (TE7)\n\n"
        "TO: $court_address\n\n"
        "APPLICANT: $name\n"
        "ADDRESS: $address\n"
        "TELEPHONE: $phone\n"
        "EMAIL: $email\n"
        "PENALTY CHARGE NUMBER: $ticket_number\n"
        "VEHICLE REGISTRATION: $registration\n"
        "DATE: $today\n\n"
        "GROUNDS FOR LATE APPLICATION ($ground_number)\n"
        "$ground_text\n\n"
        "CIRCUMSTANCES\n"
        "$statement\n\n"
        "I ask the court to grant permission to file my witness statement out "
        "of time and to consider the accompanying TE9.\n\n"
        "STATEMENT OF TRUTH\n"
        "I believe that the facts stated in this application are true.\n\n"
        "Signed: ______________________  Date: $today\n"
        "$name"
    ),
)

TE9_FORM = CourtForm(
    id="te9",
    display_name="TE9 - Witness statement (unpaid penalty charge)",
    purpose=(
        "A statement to the Traffic Enforcement Centre that one of the "
        "statutory grounds applies, revoking the Order for Recovery."
    ),
    fields=_CONTACT_FIELDS
    + (
        FormField(
            "ground",
            "Which statutory ground applies? Reply with a number:\n"
            + "\n".join(f"{n}. {text}" for n, text in TE9_GROUNDS.items()),
        ),
        FormField(
            "statement",
            "Describe the facts supporting that ground (at least 20 characters).",
        ),
    ),
    grounds=TE9_GROUNDS,
    template=(
        "WITNESS STATEMENT - UNPAID PENALTY CHARGE (TE9)\n\n"
        "TO: $court_address\n\n"
        "WITNESS: $name\n"
        "ADDRESS: $address\n"
        "TELEPHONE: $phone\n"
        "EMAIL: $email\n"
        "PENALTY CHARGE NUMBER: $ticket_number\n"
        "VEHICLE REGISTRATION: $registration\n"
        "DATE OF CONTRAVENTION: $issue_date\n"
        "LOCATION OF CONTRAVENTION: $location\n"
        "PENALTY AMOUNT: $fine_amount\n\n"
        "STATUTORY GROUND ($ground_number)\n"
        "$ground_text\n\n"
        "FACTS\n"
        "$statement\n\n"
        "STATEMENT OF TRUTH\n"
        "I believe that the facts stated in this witness statement are true.\n\n"
        "Signed: ______________________  Date: $today\n"
        "$name"
    ),
)

COURT_FORMS = {
    "te7": TE7_FORM,
    "te9": TE9_FORM,
}
