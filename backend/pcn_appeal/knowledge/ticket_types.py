from .base import TicketType

TICKET_TYPES: dict[str, TicketType] = {
    "pcn": TicketType(
        id="pcn",
        name="Penalty Charge Notice (PCN)",
        category="civil",
        appeal_route="tribunal",
        authority="Local Authority",
        time_limit="28 days from Notice to Owner",
        description="Civil parking penalties issued by local authorities",
        patterns=(
            r"PCN[0-9]{6,10}",
            r"LB[0-9]{6,10}",
            r"TK[0-9]{6,10}",
            r"BH[0-9]{6,10}",
            r"[A-Z]{2,3}[0-9]{6,10}",
        ),
        examples=("PCN123456789", "LB12345678", "TK987654321"),
        fine_range=(25, 130),
        synonyms=("pcn", "penalty charge", "parking ticket", "council parking", "parking"),
        forms=("Online Appeal", "Informal Challenge"),
    ),
    "fpn": TicketType(
        id="fpn",
        name="Fixed Penalty Notice (FPN)",
        category="criminal",
        appeal_route="court",
        authority="Police Force",
        time_limit="28 days from issue",
        description="Criminal traffic offences issued by police",
        patterns=(
            r"FPN[0-9]{6,9}",
            r"HO[0-9]{6,8}",
            r"MP[0-9]{6,8}",
            r"[A-Z]{2,4}[0-9]{6,8}",
        ),
        examples=("FPN123456789", "HO1234567", "MP12345678"),
        fine_range=(100, 1000),
        synonyms=("fpn", "fixed penalty", "police ticket", "police"),
        forms=("Court Plea", "Legal Representation"),
    ),
    "tec": TicketType(
        id="tec",
        name="Traffic Enforcement Centre Notice",
        category="TEC",
        appeal_route="court",
        authority="Traffic Enforcement Centre",
        time_limit="21 days for TE9, varies for TE7",
        description="Unpaid penalties registered for enforcement at the county court",
        patterns=(
            r"TEC[0-9]{8,10}",
            r"TE[0-9]{8,10}",
            r"24[0-9]{2}[0-9]{6,8}",
        ),
        examples=("TEC1234567890", "TE9876543210", "241234567890"),
        fine_range=(150, 2000),
        synonyms=(
            "tec",
            "traffic enforcement centre",
            "traffic enforcement center",
            "order for recovery",
            "charge certificate",
            "bailiff",
            "te7",
            "te9",
        ),
        forms=("TE7 Application", "TE9 Witness Statement"),
    ),
    "speed_camera": TicketType(
        id="speed_camera",
        name="Speed Camera Notice (NIP)",
        category="criminal",
        appeal_route="court",
        authority="Police / Camera Partnership",
        time_limit="28 days from NIP",
        description="Notice of Intended Prosecution for speeding",
        patterns=(
            r"NIP[0-9]{6,10}",
            r"NOIP[0-9]{6,10}",
            r"SC[0-9]{6,9}",
            r"CAM[0-9]{6,10}",
            r"SP[0-9]{6,10}",
        ),
        examples=("NIP123456789", "SC12345678", "CAM987654321"),
        fine_range=(100, 2500),
        synonyms=("nip", "speed camera", "speeding", "speed"),
        forms=("Court Defence", "Special Reasons", "Section 1 Request"),
    ),
    "bus_lane": TicketType(
        id="bus_lane",
        name="Bus Lane Violation Notice",
        category="civil",
        appeal_route="tribunal",
        authority="Local Authority / TfL",
        time_limit="28 days from Notice to Owner",
        description="Civil penalty for unauthorised bus lane use",
        patterns=(
            r"BL[0-9]{6,10}",
            r"TFL[0-9]{6,10}",
            r"BUS[0-9]{6,10}",
        ),
        examples=("BL123456789", "TFL987654321", "BUS12345678"),
        fine_range=(80, 160),
        synonyms=("bus lane", "bus gate"),
        forms=("Online Appeal", "Informal Challenge"),
    ),
    "red_light": TicketType(
        id="red_light",
        name="Red Light Camera Notice",
        category="criminal",
        appeal_route="court",
        authority="Police / Local Authority",
        time_limit="28 days from notice",
        description="Traffic light violation penalty",
        patterns=(
            r"RLC[0-9]{6,10}",
            r"TL[0-9]{6,10}",
            r"RL[0-9]{6,10}",
            r"TS[0-9]{6,10}",
        ),
        examples=("RLC123456789", "TL12345678", "RL987654321"),
        fine_range=(100, 1000),
        synonyms=("red light", "traffic light", "amber light"),
        forms=("Court Defence", "Technical Challenge"),
    ),
    "congestion_charge": TicketType(
        id="congestion_charge",
        name="Congestion Charge Notice",
        category="civil",
        appeal_route="tribunal",
        authority="Transport for London",
        time_limit="28 days from Notice to Owner",
        description="London Congestion Charge penalty",
        patterns=(
            r"CC[0-9]{6,10}",
            r"CCN[0-9]{6,10}",
            r"TFL[0-9]{6,10}",
        ),
        examples=("CC123456789", "CCN12345678", "TFL987654321"),
        fine_range=(80, 240),
        synonyms=("congestion charge", "congestion", "c-charge"),
        forms=("Online Appeal", "Representations"),
    ),
    "ulez": TicketType(
        id="ulez",
        name="ULEZ/LEZ Penalty Notice",
        category="civil",
        appeal_route="tribunal",
        authority="Transport for London",
        time_limit="28 days from Notice to Owner",
        description="Ultra Low/Low Emission Zone penalty",
        patterns=(
            r"ULEZ[0-9]{6,10}",
            r"ULZ[0-9]{6,10}",
            r"LEZ[0-9]{6,10}",
        ),
        examples=("ULEZ123456789", "LEZ12345678", "ULZ987654321"),
        fine_range=(80, 1000),
        synonyms=("ulez", "lez", "emission zone", "clean air zone"),
        forms=("Online Appeal", "Representations"),
    ),
    "school_street": TicketType(
        id="school_street",
        name="School Street Violation",
        category="civil",
        appeal_route="tribunal",
        authority="Local Authority",
        time_limit="28 days from Notice to Owner",
        description="School zone traffic restriction penalty",
        patterns=(
            r"SS[0-9]{6,10}",
            r"SZ[0-9]{6,10}",
            r"SCH[0-9]{6,10}",
        ),
        examples=("SS123456789", "SZ12345678", "SCH987654321"),
        fine_range=(65, 130),
        synonyms=("school street", "school zone"),
        forms=("Online Appeal", "Informal Challenge"),
    ),
    "private_parking": TicketType(
        id="private_parking",
        name="Private Parking Notice",
        category="private",
        appeal_route="company",
        authority="Private Parking Company",
        time_limit="28 days from Notice to Keeper",
        description="Private land parking charge (not a statutory penalty)",
        patterns=(
            r"PPC[0-9]{6,10}",
            r"PKG[0-9]{6,10}",
            r"CP[0-9]{6,10}",
            r"PP[0-9]{6,10}",
        ),
        examples=("PPC123456789", "PKG12345678", "CP987654321"),
        fine_range=(60, 100),
        synonyms=(
            "private parking",
            "parking charge notice",
            "popla",
            "supermarket car park",
            "retail park",
        ),
        forms=("POPLA Appeal", "IAS Appeal", "Company Appeal"),
    ),
    "unknown": TicketType(
        id="unknown",
        name="Other / Not Sure",
        category="civil",
        appeal_route="court",
        authority="Various",
        time_limit="Check notice for specific deadline",
        description="Unrecognised ticket format - requires manual review",
        patterns=(r"[A-Z0-9]{6,12}",),
        examples=("ABC123456", "XYZ987654321"),
        fine_range=(25, 2500),
        synonyms=("other", "unknown", "not sure", "don't know"),
        forms=("General Appeal", "Legal Advice Required"),
    ),
}

APPEAL_GUIDANCE: dict[str, dict] = {
    "civil": {
        "next_steps": [
            "Make an informal challenge within 14 days",
            "If rejected, appeal to the Traffic Penalty Tribunal within 28 days",
            "Gather evidence (photos, receipts, witness statements)",
            "Submit the appeal online with supporting documents",
        ],
        "cost_implications": "Free to appeal. No risk of an increased penalty.",
    },
    "criminal": {
        "next_steps": [
            "Decide between paying the fixed penalty or a court hearing",
            "If challenging, enter a not guilty plea within the time limit",
            "Gather evidence and consider legal representation",
            "Prepare a defence based on law and procedure",
        ],
        "cost_implications": "Risk of higher penalty and costs if unsuccessful at court.",
    },
    "TEC": {
        "next_steps": [
            "Check the date on the Order for Recovery",
            "File a TE9 witness statement if a statutory ground applies",
            "File a TE7 application if the TE9 is out of time",
            "Keep copies of everything sent to the Traffic Enforcement Centre",
        ],
        "cost_implications": "No court fee for TE7/TE9. Enforcement continues until filed.",
    },
    "private": {
        "next_steps": [
            "Check whether the operator belongs to the BPA or IPC",
            "Appeal to the operator, then POPLA or IAS",
            "Challenge contract formation and signage",
            "Keep all correspondence with the operator",
        ],
        "cost_implications": "Free initial appeal. This is a contractual charge, not a fine.",
    },
}


def get_ticket_type(type_id: str) -> TicketType | None:
    return TICKET_TYPES.get(type_id)


def detect_ticket_type(ticket_number: str) -> TicketType:
    clean = ticket_number.strip().upper()
    for ticket_type in TICKET_TYPES.values():
        if ticket_type.matches(clean):
            return ticket_type
    return TICKET_TYPES["unknown"]


def validate_ticket_number(ticket_number: str, type_id: str) -> bool:
    if not ticket_number or len(ticket_number.strip()) < 6:
        return False
    ticket_type = TICKET_TYPES.get(type_id)
    if ticket_type is None:
        return False
    return ticket_type.matches(ticket_number.strip().upper())


def get_appeal_guidance(ticket_type: TicketType) -> dict:
    guidance = APPEAL_GUIDANCE[ticket_type.category]
    return {
        "next_steps": list(guidance["next_steps"]),
        "forms_required": list(ticket_type.forms),
        "time_limit": ticket_type.time_limit,
        "appeal_route": f"{ticket_type.appeal_route} ({ticket_type.authority})",
        "cost_implications": guidance["cost_implications"],
    }
