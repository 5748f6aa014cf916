# -*- coding: utf-8 -*-

from __future__ import annotations

import unittest

from fitlog.csvio.export import export_csv
from fitlog.csvio.merge import ImportStatus, MergeMode, import_csv
from fitlog.logs.models import (
    CardioTraining,
    CombatTraining,
    DailyLog,
    Meal,
    StrengthEnduranceTraining,
    StrengthTraining,
    WeightType,
)

HEADER = "date,type,category,name,description,sets,reps,weight_type,weight_kg,duration_min,distance_km,calories"


def _existing() -> list:
    return [
        DailyLog(
            date="2024-04-30",
            trainings=[CombatTraining(name="MMA", duration=45)],
        ),
        DailyLog(
            date="2024-05-01",
            body_weight=78.5,
            trainings=[StrengthTraining(name="Fondos", sets=4, reps=8)],
            meals=[Meal(name="Cena", description="Pescado", calories=600)],
        ),
    ]


def _strip_ids(logs: list) -> list:
    out = []
    for log in logs:
        data = log.model_dump(mode="json", exclude={"id"})
        for item in data["trainings"] + data["meals"]:
            item.pop("id")
        out.append(data)
    return out


class TestImportRejections(unittest.TestCase):
    def test_empty_file_is_rejected(self) -> None:
        logs = _existing()
        for text in ("", "\n\n", HEADER):
            with self.subTest(text=text):
                result = import_csv(text, logs)
                self.assertIs(result.status, ImportStatus.rejected)
                self.assertFalse(result.applied)
                self.assertEqual(result.logs, logs)

    def test_missing_required_header_is_rejected(self) -> None:
        logs = _existing()
        for header in ("type,name", "date,name", "date,type"):
            with self.subTest(header=header):
                text = f"{header},description\nx,y,z"
                result = import_csv(text, logs)
                self.assertIs(result.status, ImportStatus.rejected)
                self.assertIn("missing", result.message)
                self.assertEqual(result.logs, logs)

    def test_header_match_is_case_insensitive(self) -> None:
        text = " Name ,DATE,Type,Description\nAvena,2024-06-01,meal,con leche"
        result = import_csv(text, [])
        self.assertIs(result.status, ImportStatus.ok)
        self.assertEqual(result.logs[0].meals[0].name, "Avena")


class TestImportRows(unittest.TestCase):
    def test_invalid_date_row_is_skipped_not_fatal(self) -> None:
        text = "\n".join(
            [
                HEADER,
                "2024-13-45,meal,,Avena,Avena con leche,,,,,,,350",
                "2024-05-02,meal,,Tortilla,Huevos y patata,,,,,,,500",
            ]
        )
        result = import_csv(text, [])
        self.assertIs(result.status, ImportStatus.ok)
        self.assertEqual([log.date for log in result.logs], ["2024-05-02"])
        self.assertEqual(result.rows_imported, 1)
        self.assertEqual(len(result.skipped), 1)
        self.assertEqual(result.skipped[0].row_number, 2)

    def test_short_row_does_not_disturb_following_rows(self) -> None:
        text = "\n".join(
            [
                HEADER,
                "2024-05-02,meal,,Avena",
                "2024-05-02,training,Lucha,BJJ,,,,,,60,,",
            ]
        )
        result = import_csv(text, [])
        self.assertIs(result.status, ImportStatus.ok)
        log = result.logs[0]
        self.assertEqual(log.meals, [])
        self.assertEqual(len(log.trainings), 1)
        self.assertEqual(log.trainings[0].duration, 60)

    def test_all_rows_invalid_means_no_changes(self) -> None:
        logs = _existing()
        text = "\n".join([HEADER, "2024-05-01,dessert,,Flan,Flan,,,,,,,", "bad,meal,,A,B,,,,,,,"])
        result = import_csv(text, logs)
        self.assertIs(result.status, ImportStatus.no_changes)
        self.assertFalse(result.applied)
        self.assertEqual(result.logs, logs)
        self.assertEqual(len(result.skipped), 2)

    def test_skipped_row_does_not_seed_its_date(self) -> None:
        text = "\n".join(
            [
                HEADER,
                "2024-07-01,training,Yoga,Flow,,,,,,,,",
                "2024-07-02,meal,,Avena,con leche,,,,,,,",
            ]
        )
        result = import_csv(text, [])
        self.assertEqual([log.date for log in result.logs], ["2024-07-02"])

    def test_variant_isolation(self) -> None:
        text = "\n".join(
            [
                HEADER,
                "2024-05-01,training,Fuerza,Dominadas,,3,10,bodyweight,,45,7,120",
                "2024-05-01,training,Cardio,Rucking,,5,5,kg,12,60,5,",
            ]
        )
        result = import_csv(text, [])
        strength, cardio = result.logs[0].trainings
        self.assertIsInstance(strength, StrengthTraining)
        self.assertNotIn("duration", strength.model_dump())
        self.assertNotIn("distance", strength.model_dump())
        self.assertIsInstance(cardio, CardioTraining)
        self.assertNotIn("weight_type", cardio.model_dump())
        self.assertNotIn("sets", cardio.model_dump())
        self.assertEqual(cardio.weight, 12.0)


class TestDateMerge(unittest.TestCase):
    def test_existing_date_is_replaced_by_imported_items(self) -> None:
        logs = _existing()
        original = logs[1]
        text = "\n".join(
            [
                HEADER,
                "2024-05-01,training,Fuerza,Dominadas,,3,10,bodyweight,,,,120",
                "2024-05-01,meal,,Avena,Avena con leche y fruta,,,,,,,350",
            ]
        )
        result = import_csv(text, logs)
        self.assertIs(result.status, ImportStatus.ok)
        self.assertEqual(result.imported_dates, ["2024-05-01"])
        self.assertEqual(len(result.logs), 2)

        merged = result.logs[1]
        self.assertEqual(merged.date, "2024-05-01")
        self.assertEqual([t.name for t in merged.trainings], ["Dominadas"])
        self.assertEqual([m.name for m in merged.meals], ["Avena"])
        # Day identity survives the replacement.
        self.assertEqual(merged.id, original.id)
        self.assertEqual(merged.body_weight, 78.5)

        # The stored collection is untouched.
        self.assertEqual([t.name for t in original.trainings], ["Fondos"])
        self.assertEqual([m.name for m in original.meals], ["Cena"])
        self.assertIsNot(merged, original)

    def test_dates_absent_from_import_are_untouched(self) -> None:
        logs = _existing()
        text = "\n".join([HEADER, "2024-05-01,meal,,Avena,con leche,,,,,,,"])
        result = import_csv(text, logs)
        self.assertIs(result.logs[0], logs[0])

    def test_new_dates_are_appended_with_fresh_ids(self) -> None:
        logs = _existing()
        text = "\n".join(
            [
                HEADER,
                "2024-05-03,meal,,Avena,con leche,,,,,,,",
                "2024-05-01,meal,,Cena,Ensalada,,,,,,,",
                "2024-05-03,training,Lucha,BJJ,,,,,,60,,",
            ]
        )
        result = import_csv(text, logs)
        self.assertEqual([log.date for log in result.logs], ["2024-04-30", "2024-05-01", "2024-05-03"])
        new_log = result.logs[2]
        self.assertNotIn(new_log.id, {log.id for log in logs})
        # Later rows for a date accumulate into the same in-progress day.
        self.assertEqual(len(new_log.meals), 1)
        self.assertEqual(len(new_log.trainings), 1)

    def test_append_mode_keeps_existing_items_first(self) -> None:
        logs = _existing()
        text = "\n".join(
            [
                HEADER,
                "2024-05-01,training,Lucha,BJJ,,,,,,60,,",
                "2024-05-01,training,Cardio,Comba,,,,,,10,,",
            ]
        )
        result = import_csv(text, logs, mode=MergeMode.append)
        merged = result.logs[1]
        self.assertEqual([t.name for t in merged.trainings], ["Fondos", "BJJ", "Comba"])
        self.assertEqual([m.name for m in merged.meals], ["Cena"])
        # Deep copy: the stored day still has its single training.
        self.assertEqual(len(logs[1].trainings), 1)
        self.assertIsNot(merged.trainings[0], logs[1].trainings[0])

    def test_unexpected_input_is_reported_not_raised(self) -> None:
        result = import_csv(object(), [])  # type: ignore[arg-type]
        self.assertIs(result.status, ImportStatus.rejected)


class TestRoundTrip(unittest.TestCase):
    def test_export_then_import_reproduces_the_collection(self) -> None:
        logs = [
            DailyLog(
                date="2024-05-01",
                trainings=[
                    StrengthTraining(name="Dominadas", sets=3, reps=10, calories_burned=120),
                    StrengthTraining(name="Sentadillas", sets=5, reps=5, weight_type=WeightType.kg, weight=82.5),
                    CombatTraining(name="BJJ", duration=90, calories_burned=700),
                ],
                meals=[Meal(name="Avena", description='He said "go", then\nleft', calories=350)],
            ),
            DailyLog(
                date="2024-05-02",
                trainings=[
                    CardioTraining(name="Rucking", duration=60, distance=6.5, weight=15.0),
                    StrengthEnduranceTraining(name="Thrusters", sets=5, reps=15, weight=20.0),
                    StrengthEnduranceTraining(name="Burpees", sets=3, reps=20),
                ],
                meals=[Meal(name="Cena", description="Pescado, arroz", calories=None)],
            ),
        ]
        result = import_csv(export_csv(logs), [])
        self.assertIs(result.status, ImportStatus.ok)
        self.assertEqual(_strip_ids(result.logs), _strip_ids(logs))
        self.assertEqual(result.logs[0].meals[0].description, 'He said "go", then\nleft')

    def test_day_with_loosely_typed_text_survives(self) -> None:
        logs = [
            DailyLog(
                date="2024-05-03",
                trainings=[CombatTraining(name=" BJJ ", duration=60)],
                meals=[Meal(name="Cafe", description=" solo ")],
            )
        ]
        result = import_csv(export_csv(logs), [])
        self.assertIs(result.status, ImportStatus.ok)
        self.assertEqual(result.skipped, [])
        self.assertEqual(_strip_ids(result.logs), _strip_ids(logs))


if __name__ == "__main__":
    unittest.main()
